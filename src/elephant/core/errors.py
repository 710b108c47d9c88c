"""Exception hierarchy and the application's outer error handlers.

The REST adapters only recover two conditions locally (id present on create,
entity not found). Everything else propagates to the handlers registered here.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class ElephantError(Exception):
    """Base class for errors raised by this service."""


class InvalidSortError(ElephantError):
    """A sort order references a property the entity does not have."""

    def __init__(self, entity: str, prop: str) -> None:
        self.entity = entity
        self.prop = prop
        super().__init__(f"Cannot sort {entity} by unknown property '{prop}'")


class ResourceUriError(ElephantError):
    """The Location URI of a newly created entity could not be built."""


async def invalid_sort_handler(request: Request, exc: InvalidSortError) -> JSONResponse:
    logger.warning(
        "rest.invalid_sort",
        path=request.url.path,
        entity=exc.entity,
        prop=exc.prop,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "rest.unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the outer error handlers to the application."""
    app.add_exception_handler(InvalidSortError, invalid_sort_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
