"""Rate limiting adapters.

The API depends on ``AbstractRateLimiter`` only, so the in-memory limiter can
later be replaced by a shared store (e.g., Redis) when the service runs with
more than one process.
"""

from vehicle_lookup.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from vehicle_lookup.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
