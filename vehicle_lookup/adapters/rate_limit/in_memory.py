"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit,
  and all state is lost on restart.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from vehicle_lookup.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _WindowState:
    count: int
    window_reset_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed window per key.

    A key's window starts with its first request and lasts ``window_seconds``.
    Up to ``limit`` requests are allowed inside it; the first request after
    the window has passed starts a new window with a count of one.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of allowed requests per window.
            window_seconds: Length of the window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}
        self._next_sweep_at = 0.0

    def _sweep_expired_locked(self, now: float) -> None:
        """Drop keys whose window has passed, at most once per window length.

        Keeps the map bounded by the keys seen within roughly the last two
        windows, however many distinct identifiers clients send.
        """
        if now < self._next_sweep_at:
            return
        expired = [k for k, s in self._state_by_key.items() if now > s.window_reset_at]
        for key in expired:
            del self._state_by_key[key]
        self._next_sweep_at = now + self._window_seconds

    def _result(self, *, allowed: bool, now: float, state: _WindowState) -> RateLimitResult:
        reset_at = int(math.ceil(state.window_reset_at))
        retry_after = None
        if not allowed:
            retry_after = max(1, int(math.ceil(state.window_reset_at - now)))
        return RateLimitResult(
            allowed=allowed,
            limit=self._limit,
            remaining=max(0, self._limit - state.count),
            reset_at=reset_at,
            retry_after_seconds=retry_after,
        )

    def consume(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it may proceed.

        Args:
            key: Client identifier.

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            self._sweep_expired_locked(now)
            state = self._state_by_key.get(key)

            if state is None or now > state.window_reset_at:
                state = _WindowState(count=1, window_reset_at=now + self._window_seconds)
                self._state_by_key[key] = state
                return self._result(allowed=True, now=now, state=state)

            if state.count < self._limit:
                state.count += 1
                return self._result(allowed=True, now=now, state=state)

            return self._result(allowed=False, now=now, state=state)
