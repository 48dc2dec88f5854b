"""Application-level exception types.

Services and adapters raise these errors; the exception handlers map each
class to an HTTP status and a ``{"error": message}`` body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for logs.

    Never serialized to clients; the response body carries the message only.
    """

    hint: str
    actual_value: int
    vin: str
    upstream_status: int
    upstream_url: str
    limit: int
    remaining: int
    reset_at: int
    retry_after: int
    provider: str
    error_type: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message returned to the client.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input is missing or malformed."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when a client exceeds its request budget.

    Attributes:
        headers: Extra response headers (Retry-After, X-RateLimit-*).
    """

    headers: dict[str, str] | None = None


class UpstreamAppError(AppError):
    """Raised when an external lookup service fails or is unreachable."""


class InternalAppError(AppError):
    """Raised for unexpected failures while serving a request."""
