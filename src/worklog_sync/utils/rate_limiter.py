"""Sliding-window rate limiter for outbound API calls."""

import asyncio
import logging
import threading
import time
from collections import deque
from datetime import timedelta
from typing import Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Throttle requests by counting timestamps inside a trailing window.

    The limiter is sliding-window, not token-bucket: a burst of
    ``max_requests`` calls goes through immediately, and the next call waits
    until the oldest of them falls out of the window.
    """

    def __init__(
        self,
        max_requests: int,
        window: timedelta | float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize rate limiter.

        Args:
            max_requests: Maximum number of requests allowed in the window.
            window: Window length as a timedelta or in seconds.
            clock: Monotonic clock returning seconds.
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")

        self.max_requests = max_requests
        self.window = window.total_seconds() if isinstance(window, timedelta) else float(window)
        self._clock = clock
        self._timestamps: deque[float] = deque()
        self._lock = threading.Lock()

    @classmethod
    def for_clockify_api(cls) -> "RateLimiter":
        """Create a limiter with a conservative 10 requests per second."""
        return cls(10, timedelta(seconds=1))

    def _evict(self, now: float) -> None:
        # Caller must hold the lock.
        while self._timestamps and now - self._timestamps[0] > self.window:
            self._timestamps.popleft()

    def _wait_seconds(self, now: float) -> float:
        # Caller must hold the lock.
        if len(self._timestamps) < self.max_requests:
            return 0.0
        return max(0.0, self.window - (now - self._timestamps[0]))

    async def wait_if_needed(self) -> None:
        """Wait until another request fits in the window, then record it.

        Cancelling the waiting task raises ``asyncio.CancelledError`` and
        leaves the window untouched. Concurrent waiters that wake together
        check the window again, so only as many as fit are let through.
        """
        while True:
            with self._lock:
                now = self._clock()
                self._evict(now)
                if len(self._timestamps) < self.max_requests:
                    self._timestamps.append(now)
                    return
                wait = self._wait_seconds(now)

            logger.debug(f"Rate limit reached, waiting {wait:.3f}s")
            await asyncio.sleep(wait)

    @property
    def current_request_count(self) -> int:
        """Number of requests recorded inside the current window."""
        with self._lock:
            self._evict(self._clock())
            return len(self._timestamps)

    @property
    def estimated_wait_time(self) -> timedelta:
        """Time until the next request could go out without waiting."""
        with self._lock:
            now = self._clock()
            self._evict(now)
            return timedelta(seconds=self._wait_seconds(now))
