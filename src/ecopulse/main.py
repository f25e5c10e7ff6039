"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ecopulse.analytics.router import router as analytics_router
from ecopulse.assistant.router import router as assistant_router
from ecopulse.config import get_settings
from ecopulse.database import close_db, create_schema, init_db
from ecopulse.geo.router import router as map_router
from ecopulse.health.router import router as health_router
from ecopulse.impact.router import router as impact_router
from ecopulse.middleware import setup_middleware
from ecopulse.predictions.router import router as predictions_router
from ecopulse.redis_client import close_redis, init_redis
from ecopulse.reports.router import router as reports_router


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)

    if settings.environment == "development":
        await create_schema()

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="EcoPulse API",
        description="Map layers, trends, community reports and impact scoring for the EcoPulse dashboard",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(map_router)
    app.include_router(analytics_router)
    app.include_router(reports_router)
    app.include_router(predictions_router)
    app.include_router(impact_router)
    app.include_router(assistant_router)

    return app


app = create_app()
