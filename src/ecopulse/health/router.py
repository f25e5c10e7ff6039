"""Liveness, readiness and version probes."""

from fastapi import APIRouter, Depends

from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.redis_client import redis_status
from ecopulse.store.base import RecordStore, StoreError
from ecopulse.taxonomy import USER_PROFILES

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(
    store: RecordStore = Depends(get_store),  # noqa: B008
) -> dict[str, object]:
    """Probe the record store with a one-row read and ping Redis.

    A missing Redis only degrades rate limiting, so it is reported but the
    status code stays 200.
    """
    checks: dict[str, str] = {}
    try:
        await store.select(USER_PROFILES, limit=1)
        checks["record_store"] = "ok"
    except StoreError as exc:
        checks["record_store"] = f"error: {exc.reason}"
    checks["redis"] = await redis_status()

    healthy = all(value == "ok" for value in checks.values())
    return {"status": "ready" if healthy else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    settings = get_settings()
    return {"version": settings.app_version, "environment": settings.environment}
