"""FastAPI application factory.

Creates the app with logging middleware, metrics middleware, CORS, Sentry,
lifespan events for database initialization, error handlers, and the REST
resources for deals and passengers.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import Response

from src.elephant.api.middleware.logging import LoggingMiddleware, configure_structlog
from src.elephant.api.rest.router import build_router
from src.elephant.config import get_settings
from src.elephant.core.database import close_db, get_session, init_db
from src.elephant.core.errors import register_exception_handlers
from src.elephant.core.monitoring import MetricsMiddleware, get_metrics_response, init_sentry
from src.elephant.deals.service import DealService
from src.elephant.passengers.service import PassengerService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: init DB and Sentry on startup, close on shutdown."""
    log = structlog.get_logger(__name__)
    settings = get_settings()
    configure_structlog()

    if settings.DATABASE_AUTO_CREATE:
        await init_db()
        log.info("database.tables_ready")

    if settings.SENTRY_DSN:
        init_sentry(dsn=settings.SENTRY_DSN, environment=settings.ENVIRONMENT.value)
        log.info("sentry.initialized", environment=settings.ENVIRONMENT.value)

    yield

    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Elegant Elephant API",
        version="0.1.0",
        description="Travel deals and passengers",
        lifespan=lifespan,
    )

    # Middleware is added in reverse order (last added = outermost)
    cors_origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        # Credentials only for an explicit origin list, never with "*"
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Location",
            "Link",
            "X-Total-Count",
            f"X-{settings.APP_NAME}-alert",
            f"X-{settings.APP_NAME}-error",
            f"X-{settings.APP_NAME}-params",
        ],
    )

    # Logging middleware (logs every request with timing)
    app.add_middleware(LoggingMiddleware)

    # Metrics middleware (outermost -- records Prometheus metrics for all requests)
    app.add_middleware(MetricsMiddleware)

    register_exception_handlers(app)

    app.state.deal_service = DealService(session_factory=get_session)
    app.state.passenger_service = PassengerService(session_factory=get_session)
    app.include_router(
        build_router(
            deal_service=app.state.deal_service,
            passenger_service=app.state.passenger_service,
        )
    )

    # Prometheus metrics endpoint (infrastructure route, outside the API router)
    @app.get("/metrics", include_in_schema=False)
    async def metrics(request: Request) -> Response:
        """Prometheus metrics endpoint."""
        return get_metrics_response()

    return app


# Module-level app for uvicorn
app = create_app()
