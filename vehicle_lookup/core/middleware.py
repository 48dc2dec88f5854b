"""HTTP middleware for CORS and request correlation.

Usage:
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(cors_middleware)

Register ``cors_middleware`` last so it is outermost and answers preflight
requests before any other processing.
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from vehicle_lookup.core.config import settings
from vehicle_lookup.core.logging import clear_request_id, set_request_id

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def cors_middleware(request: Request, call_next) -> Response:
    """Allow every origin and short-circuit preflight requests.

    ``OPTIONS`` requests get an empty 200 without reaching the routes (and so
    never count against the rate limit). All other responses, error bodies
    included, get the CORS headers added.
    """

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    response: Response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


async def request_id_middleware(request: Request, call_next) -> Response:
    """HTTP middleware for request ID generation and propagation.

    Uses the incoming request-id header (``LOG_REQUEST_ID_HEADER``, default
    ``X-Request-ID``) or generates a UUID, stores it in contextvars for log
    correlation, and echoes it on the response together with the total
    handling time in ``X-Request-Duration-ms``.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with correlation headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
