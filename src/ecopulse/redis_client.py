"""Shared Redis client.

Redis only backs the request rate limiter. The core never depends on it,
so every helper here reports "unavailable" instead of raising.
"""

import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError

logger = structlog.get_logger()

_client: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    """Create the shared client. Connections are opened lazily."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None


async def incr_window(key: str, ttl_seconds: int) -> int | None:
    """Increment a windowed counter and return its value.

    Returns None when Redis is not initialised or unreachable.
    """
    if _client is None:
        return None
    try:
        pipe = _client.pipeline()
        pipe.incr(key)
        pipe.expire(key, ttl_seconds)
        count, _ = await pipe.execute()
    except RedisError:
        logger.warning("redis_counter_unavailable", key=key, exc_info=True)
        return None
    return int(count)


async def redis_status() -> str:
    """``ok`` or an ``error: ...`` string for the readiness probe."""
    if _client is None:
        return "error: not initialized"
    try:
        await _client.ping()
    except RedisError as exc:
        return f"error: {exc}"
    return "ok"
