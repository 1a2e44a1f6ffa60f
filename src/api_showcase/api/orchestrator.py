"""Retrying wrapper around :class:`DataFetcher`."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from api_showcase.api.endpoints import Endpoint
from api_showcase.api.errors import is_transient
from api_showcase.config import AppConfig
from api_showcase.utils.retry import Sleep, with_retry


class Fetcher(Protocol):
    """Anything that can fetch an endpoint: a single attempt or a retrying wrapper."""

    async def fetch(self, endpoint: Endpoint | str) -> Any: ...


class RetryingFetcher:
    """Retries every failed fetch with linear backoff.

    Attempt ``k`` that fails (for ``k < max_attempts``) is followed by a sleep
    of ``k * backoff_seconds``. Only the failure from the last attempt reaches
    the caller.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        transient_only: bool = False,
        sleep: Sleep = asyncio.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be a positive integer, got {max_attempts}")
        self._fetcher = fetcher
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._transient_only = transient_only
        self._sleep = sleep
        self._logger = logger

    @classmethod
    def from_config(cls, fetcher: Fetcher, config: AppConfig, **kwargs: Any) -> RetryingFetcher:
        return cls(
            fetcher,
            max_attempts=config.max_attempts,
            backoff_seconds=config.retry_backoff_seconds,
            transient_only=config.retry_transient_only,
            **kwargs,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def fetch(self, endpoint: Endpoint | str, max_attempts: int | None = None) -> Any:
        target = Endpoint.parse(endpoint)
        return await with_retry(
            lambda: self._fetcher.fetch(target),
            max_attempts=max_attempts if max_attempts is not None else self._max_attempts,
            backoff_seconds=self._backoff_seconds,
            should_retry=is_transient if self._transient_only else None,
            sleep=self._sleep,
            logger=self._logger,
        )
