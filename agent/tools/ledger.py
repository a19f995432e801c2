from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from config.settings import get_settings


class LedgerClient:
    """Posts classified records to the ledger API.

    Milestones go to ``{base_url}/milestones`` and transactions to
    ``{base_url}/transactions``, as JSON bodies using the camelCase field
    names the app already stores.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url if base_url is not None else settings.ledger_api_url
        self.timeout = timeout if timeout is not None else settings.ledger_timeout
        self._transport = transport

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.base_url:
            raise RuntimeError("LEDGER_API_URL not configured")

        endpoint = f"{self.base_url.rstrip('/')}/{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(endpoint, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RuntimeError(f"Ledger API call to {path} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError:
            return {}

    async def record_milestone(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("milestones", payload)

    async def record_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("transactions", payload)
