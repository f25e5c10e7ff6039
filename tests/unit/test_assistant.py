"""Assistant pass-through tests."""

from __future__ import annotations

import json

import httpx
import pytest

from ecopulse.assistant.service import EMPTY_RESPONSE, FALLBACK_RESPONSE, ask_assistant
from ecopulse.config import Settings


@pytest.fixture
def settings():
    return Settings(assistant_url="http://assistant.test/chat", assistant_api_key="k-123")


class TestAskAssistant:
    @pytest.mark.asyncio
    async def test_forwards_message_and_returns_reply(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"response": "Air quality is moderate."})

        reply = await ask_assistant(
            "How is the air?", "air quality", settings=settings, transport=httpx.MockTransport(handler),
        )

        assert reply == "Air quality is moderate."
        assert seen["body"] == {"message": "How is the air?", "context": "air quality"}
        assert seen["auth"] == "Bearer k-123"

    @pytest.mark.asyncio
    async def test_server_error_body_still_used(self, settings):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"response": "Partial answer."}),
        )
        assert await ask_assistant("hi", settings=settings, transport=transport) == "Partial answer."

    @pytest.mark.asyncio
    async def test_missing_response_field(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"error": "boom"}))
        assert await ask_assistant("hi", settings=settings, transport=transport) == EMPTY_RESPONSE

    @pytest.mark.asyncio
    async def test_non_json_body_falls_back(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        assert await ask_assistant("hi", settings=settings, transport=transport) == FALLBACK_RESPONSE

    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        reply = await ask_assistant("hi", settings=settings, transport=httpx.MockTransport(handler))
        assert reply == FALLBACK_RESPONSE
