"""Simple rate limiting utilities."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class RateLimiter:
    """Spaces out calls so no more than ``requests_per_minute`` start per minute.

    Shared by every operation that goes through the same fetcher, so it is the
    one place where independent operations wait on each other.
    """

    def __init__(
        self,
        requests_per_minute: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be positive")
        self._min_interval = 60.0 / requests_per_minute
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_time: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def wait(self) -> None:
        async with self._lock:
            if self._last_time is not None:
                elapsed = self._clock() - self._last_time
                sleep_time = self._min_interval - elapsed
                if sleep_time > 0:
                    await self._sleep(sleep_time)
            self._last_time = self._clock()


def build_rate_limiter(requests_per_minute: int) -> RateLimiter | None:
    """Return a limiter, or ``None`` when ``requests_per_minute`` is 0 (unbounded)."""
    if requests_per_minute == 0:
        return None
    return RateLimiter(requests_per_minute)
