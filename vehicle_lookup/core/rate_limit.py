"""Rate limiting dependency for FastAPI routes.

Strategy: fixed window per client identifier, read from the forwarded
client-IP header (``APP_CLIENT_IP_HEADER``). Requests without the header all
share the ``"unknown"`` bucket.
"""

from __future__ import annotations

import logging

from fastapi import Request

from vehicle_lookup.adapters.rate_limit.base import AbstractRateLimiter
from vehicle_lookup.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from vehicle_lookup.core.config import settings
from vehicle_lookup.core.errors import RateLimitAppError
from vehicle_lookup.core.logging import hash_identifier

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemoryFixedWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def get_client_identifier(request: Request) -> str:
    """Read the rate limit key from the forwarded client-IP header."""

    value = request.headers.get(settings.app.client_ip_header, "").strip()
    return value or UNKNOWN_CLIENT


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the per-client request budget.

    Raises:
        RateLimitAppError: When the client exceeded its budget for the window.
    """

    if not settings.app.rate_limit_enabled:
        return

    identifier = get_client_identifier(request)
    result = get_rate_limiter().consume(identifier)

    log_context = {
        "client_hash": hash_identifier(identifier),
        "limit": result.limit,
        "remaining": result.remaining,
        "window_s": settings.app.rate_limit_window_seconds,
    }

    if result.allowed:
        logger.debug("rate_limit.allowed", extra=log_context)
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={**log_context, "retry_after_s": retry_after},
    )

    headers: dict[str, str] | None = None
    if settings.app.rate_limit_include_headers:
        headers = {
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": str(result.reset_at),
        }

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Please try again later.",
        details={
            "limit": result.limit,
            "remaining": result.remaining,
            "reset_at": result.reset_at,
            "retry_after": retry_after,
        },
        headers=headers,
    )
