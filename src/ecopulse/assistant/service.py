"""Pass-through client for the external environmental assistant."""

from __future__ import annotations

import httpx
import structlog

from ecopulse.config import Settings, get_settings

logger = structlog.get_logger()

FALLBACK_RESPONSE = (
    "I'm having trouble connecting right now. In the meantime, I can tell you that "
    "our system monitors deforestation, air quality, water pollution, and climate "
    "patterns using satellite data and machine learning. What specific aspect interests you?"
)
EMPTY_RESPONSE = "I apologize, but I encountered an issue processing your request. Please try again."
DEFAULT_CONTEXT = "environmental analysis"


async def ask_assistant(
    message: str,
    context: str = DEFAULT_CONTEXT,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Forward ``{message, context}`` and return the responder's text.

    Never raises: transport errors fall back to a static answer.
    """
    settings = settings or get_settings()
    headers = {"Content-Type": "application/json"}
    if settings.assistant_api_key:
        headers["Authorization"] = f"Bearer {settings.assistant_api_key}"

    try:
        async with httpx.AsyncClient(
            timeout=settings.assistant_timeout_seconds,
            transport=transport,
        ) as client:
            resp = await client.post(
                settings.assistant_url,
                json={"message": message, "context": context},
                headers=headers,
            )
            data = resp.json()
    except (httpx.HTTPError, ValueError):
        logger.warning("assistant_request_failed", exc_info=True)
        return FALLBACK_RESPONSE

    # The responder answers with a usable ``response`` even on its own 500s.
    reply = data.get("response") if isinstance(data, dict) else None
    if not isinstance(reply, str) or not reply.strip():
        return EMPTY_RESPONSE
    return reply
