"""Global exception handlers for consistent error responses.

Every error leaves the service as ``{"error": "<message>"}``:
- ValidationAppError → 400
- RateLimitAppError → 429 (with Retry-After / X-RateLimit-* headers)
- UpstreamAppError, InternalAppError → 500
- HTTPException / RequestValidationError → their own status, same body shape
- Unexpected Exception → 500 (safety net)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vehicle_lookup.core.errors import (
    AppError,
    InternalAppError,
    RateLimitAppError,
    UpstreamAppError,
)
from vehicle_lookup.core.logging import get_request_id
from vehicle_lookup.core.middleware import CORS_HEADERS

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(exc: AppError) -> int:
    """Map an application error to its HTTP status code."""

    if isinstance(exc, RateLimitAppError):
        return 429
    if isinstance(exc, (UpstreamAppError, InternalAppError)):
        return 500
    return 400


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "request_path": request.url.path,
        "request_method": request.method,
        "request_payload": getattr(request.state, "lookup_payload", None),
        "request_id": get_request_id(),
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code and the error message.
    """
    status_code = status_code_for(exc)

    logger.log(
        logging.ERROR if status_code >= 500 else logging.WARNING,
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "error_details": exc.details,
            "status_code": status_code,
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message},
        headers=getattr(exc, "headers", None),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404, 405, ...) in the service's error shape."""

    logger.warning(
        "http_error_handled",
        extra={"status_code": exc.status_code, **_request_context(request)},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "request_validation_failed",
        extra={"errors": exc.errors(), **_request_context(request)},
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Runs outside the HTTP middleware stack, so it attaches the CORS headers
    itself. The message is the exception text when it has one.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            **_request_context(request),
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or INTERNAL_ERROR_MESSAGE},
        headers=CORS_HEADERS,
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
