"""
Application-wide exception handlers.

Storefront errors that escape a route keep their status code. Anything else
is logged with its request context and answered with a 500 carrying an error
id that can be matched against the logs.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from celestial_crystals.core.errors import StorefrontError
from celestial_crystals.core.logging_config import get_logger
from celestial_crystals.core.monitoring import log_error

logger = get_logger(__name__)


def to_http_exception(exc: StorefrontError) -> HTTPException:
    """Translate a storefront error into the HTTP error a route raises."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Answer an unhandled ``StorefrontError`` with its own status code."""
    logger.warning(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and return a 500 response.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with the error id and type
    """
    error_id = id(exc)
    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the exception handlers with the application."""
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
