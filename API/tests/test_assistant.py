import asyncio
from datetime import date

import httpx

from core.config import settings
from services import assistant
from services.billing import BillingService


AS_OF = date(2026, 2, 28)


def test_prompt_carries_stats_and_rules(db_session, make_customer) -> None:
    make_customer(area="SECTOR-4-A")
    prompt = assistant.build_system_prompt(BillingService(db_session).get_stats(AS_OF))

    assert '"total_active": 1' in prompt
    assert "SECTOR-4-A" in prompt
    assert "February 2026" in prompt
    assert "17 MB: Company 535, My 1400" in prompt


def test_ask_without_key_is_unavailable(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "assistant_api_key", "")
    response = client.post("/api/assistant/ask", json={"question": "How many users?"})
    assert response.status_code == 503


def test_ask_rejects_empty_question(client) -> None:
    response = client.post("/api/assistant/ask", json={"question": "   "})
    assert response.status_code == 400


def _patch_transport(monkeypatch, handler) -> None:
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(assistant.httpx, "AsyncClient", factory)
    monkeypatch.setattr(settings, "assistant_api_key", "test-key")


def test_ask_returns_model_reply(db_session, monkeypatch) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"choices": [{"message": {"content": "You have 0 users."}}]})

    _patch_transport(monkeypatch, handler)
    stats = BillingService(db_session).get_stats(AS_OF)

    reply = asyncio.run(assistant.ask("How many users?", stats))

    assert reply == "You have 0 users."
    assert seen["auth"] == "Bearer test-key"


def test_ask_upstream_failure_falls_back(db_session, monkeypatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    _patch_transport(monkeypatch, handler)
    stats = BillingService(db_session).get_stats(AS_OF)

    assert asyncio.run(assistant.ask("?", stats)) == assistant.FALLBACK_REPLY


def test_ask_malformed_reply_falls_back(db_session, monkeypatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    _patch_transport(monkeypatch, handler)
    stats = BillingService(db_session).get_stats(AS_OF)

    assert asyncio.run(assistant.ask("?", stats)) == assistant.FALLBACK_REPLY
