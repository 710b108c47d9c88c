"""Request logging for the REST resources.

Every request is logged once it completes, keyed by the matched route
template (``/api/deals/{id}``) rather than the raw path so log queries group
by resource operation. A request id is taken from the caller's
``X-Request-ID`` header or generated, bound into structlog's contextvars for
the duration of the request, and echoed on the response.

Health and metrics requests are logged at debug level only.
"""

from __future__ import annotations

import logging
import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.elephant.config import Environment, get_settings

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_QUIET_PATHS = frozenset({"/health", "/health/ready", "/metrics"})


def configure_structlog() -> None:
    """Route structlog through stdlib logging at LOG_LEVEL.

    Production renders JSON lines, every other environment the console
    renderer.
    """
    settings = get_settings()
    logging.basicConfig(format="%(message)s", level=settings.LOG_LEVEL.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.ENVIRONMENT == Environment.production
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one ``request_completed`` (or ``request_failed``) event per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start = time.perf_counter()

        with structlog.contextvars.bound_contextvars(
            request_id=request_id, method=request.method
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.error(
                    "request_failed",
                    method=request.method,
                    route=_route_template(request),
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
                raise

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path in _QUIET_PATHS and response.status_code < 500:
            log = logger.debug
        elif response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "request_completed",
            method=request.method,
            route=_route_template(request),
            path=request.url.path,
            query=request.url.query or None,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        return response
