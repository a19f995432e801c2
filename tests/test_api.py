import inspect

import pytest
from fastapi.testclient import TestClient

from agent.classifier import ClassifierClient
from agent.core.i18n import t
from app.main import app, get_chatbot, get_messages, send_message, serve, set_language
from tests.replies import MILESTONE_REPLY, TRANSACTION_REPLY


@pytest.fixture
def client(make_chatbot):
    chatbot = make_chatbot(TRANSACTION_REPLY, MILESTONE_REPLY)
    app.dependency_overrides[get_chatbot] = lambda: chatbot
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_send_message_returns_reply_and_conversation(client, recorders):
    _, record_transaction = recorders
    resp = client.post(
        "/chatbot/messages",
        json={"client_id": "c1", "text": "I spent 500 on groceries at BigBazaar", "language": "en"},
    )
    assert resp.status_code == 200
    body = resp.json()

    assert body["reply"]["isUser"] is False
    assert body["reply"]["data"]["kind"] == "transaction"
    assert body["reply"]["data"]["spentCategory"] == "groceries"
    assert [m["isUser"] for m in body["messages"]] == [False, True, False]
    record_transaction.assert_called_once()


def test_conversation_and_language_endpoints(client):
    client.post("/chatbot/messages", json={"client_id": "c1", "text": "I spent 500"})

    history = client.get("/chatbot/c1/messages").json()["messages"]
    assert len(history) == 3
    assert history[0]["text"] == t("chatbotWelcome", "en")

    switched = client.put("/chatbot/c1/language", json={"language": "gu"}).json()["messages"]
    assert switched[0]["text"] == t("chatbotWelcome", "gu")
    assert switched[1:] == history[1:]


def test_blank_text_is_400(client):
    resp = client.post("/chatbot/messages", json={"client_id": "c1", "text": "   "})
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"client_id": "c1", "text": "hi", "language": "fr"},
        {"client_id": "c1", "text": "x" * 501},
        {"text": "hi"},
    ],
)
def test_invalid_requests_are_422(client, payload):
    assert client.post("/chatbot/messages", json=payload).status_code == 422


def test_strings_endpoint(client):
    body = client.get("/chatbot/strings/mr").json()
    assert body["assistantName"] == "Pockit"
    assert body["chatbotPlaceholder"] == t("chatbotPlaceholder", "mr")
    assert client.get("/chatbot/strings/fr").status_code == 422


def test_missing_model_config_is_500(monkeypatch, make_chatbot):
    def no_key():
        raise RuntimeError("GOOGLE_API_KEY not set")

    monkeypatch.setattr("agent.classifier.build_classifier_llm", no_key)
    chatbot = make_chatbot()
    chatbot.classifier = ClassifierClient(timeout=1.0)
    app.dependency_overrides[get_chatbot] = lambda: chatbot
    try:
        resp = TestClient(app).post("/chatbot/messages", json={"client_id": "c9", "text": "hi"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert "GOOGLE_API_KEY" in resp.json()["detail"]
    assert len(chatbot.history("c9")) == 1


def test_serve_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr("app.main.uvicorn.run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.delenv("HOST", raising=False)

    serve()

    assert calls == [((app,), {"host": "0.0.0.0", "port": 9001})]


def test_session_handlers_run_on_the_event_loop():
    for handler in (get_messages, send_message, set_language):
        assert inspect.iscoroutinefunction(handler)
