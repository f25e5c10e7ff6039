"""Middleware and error handler registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecopulse.config import Settings
from ecopulse.middleware.error_handler import setup_error_handlers
from ecopulse.middleware.logging import setup_logging
from ecopulse.middleware.rate_limit import RateLimitMiddleware
from ecopulse.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware; the last one added runs outermost.

    CORS wraps everything so 429s from the rate limiter still carry the
    dashboard's CORS headers.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit"],
    )
