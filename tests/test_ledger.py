import json

import httpx
import pytest

from agent.tools import LedgerClient


def _recording_transport(requests, status_code=201, body=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"id": 7})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_record_transaction_posts_json():
    requests = []
    client = LedgerClient(
        base_url="http://ledger.test/api/", transport=_recording_transport(requests)
    )

    result = await client.record_transaction({"amount": 500.0, "receiver": "BigBazaar"})

    assert result == {"id": 7}
    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == "http://ledger.test/api/transactions"
    assert json.loads(requests[0].content) == {"amount": 500.0, "receiver": "BigBazaar"}


@pytest.mark.asyncio
async def test_record_milestone_posts_to_milestones():
    requests = []
    client = LedgerClient(base_url="http://ledger.test", transport=_recording_transport(requests))

    await client.record_milestone({"savedAmount": 2000.0, "goalAmount": 10000.0, "duration": "3 months"})

    assert str(requests[0].url) == "http://ledger.test/milestones"


@pytest.mark.asyncio
async def test_http_errors_raise_runtime_error():
    client = LedgerClient(
        base_url="http://ledger.test", transport=_recording_transport([], status_code=503)
    )
    with pytest.raises(RuntimeError, match="transactions failed"):
        await client.record_transaction({"amount": 1.0})


@pytest.mark.asyncio
async def test_missing_base_url_raises():
    with pytest.raises(RuntimeError, match="LEDGER_API_URL"):
        await LedgerClient(base_url="").record_milestone({})
