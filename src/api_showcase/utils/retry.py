"""Retry helper with linear backoff."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def backoff_delay(attempt: int, backoff_seconds: float) -> float:
    """Delay after failed ``attempt`` (1-based): one unit per attempt made so far."""
    return backoff_seconds * attempt


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    backoff_seconds: float = 1.0,
    should_retry: Callable[[Exception], bool] | None = None,
    sleep: Sleep = asyncio.sleep,
    logger: logging.Logger | None = None,
) -> T:
    """Await ``fn`` until it succeeds or ``max_attempts`` is used up.

    The exception from the final attempt is re-raised unchanged; earlier ones
    are dropped. No delay follows the final attempt. ``should_retry`` returning
    False stops immediately with the current exception.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be a positive integer, got {max_attempts}")

    attempt = 0
    while True:
        attempt += 1
        try:
            return await fn()
        except Exception as exc:  # noqa: BLE001 - intentional retry wrapper
            if attempt >= max_attempts:
                raise
            if should_retry is not None and not should_retry(exc):
                raise

            sleep_time = backoff_delay(attempt, backoff_seconds)
            if logger:
                logger.warning(
                    "Attempt %d/%d failed: %s (sleep %.2fs)", attempt, max_attempts, exc, sleep_time
                )
            await sleep(sleep_time)
