"""Single-attempt JSON fetcher for the demo API.

One call to :meth:`DataFetcher.fetch` is one GET request. Failures are mapped
onto the types in :mod:`api_showcase.api.errors` and always raised; nothing is
retried or cached here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from api_showcase.api.endpoints import Endpoint
from api_showcase.api.errors import DecodeFailure, StatusFailure, TransportFailure
from api_showcase.config import AppConfig
from api_showcase.utils.rate_limit import RateLimiter, build_rate_limiter

logger = logging.getLogger(__name__)


def build_async_client(config: AppConfig | None = None, **kwargs: Any) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` pointed at the configured API."""
    config = config or AppConfig()
    headers = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        base_url=config.api_base_url,
        timeout=httpx.Timeout(config.request_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        **kwargs,
    )


class DataFetcher:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._owns_client = client is None
        self._client = client or build_async_client(self._config)
        if rate_limiter is None:
            rate_limiter = build_rate_limiter(self._config.requests_per_minute)
        self._rate_limiter = rate_limiter

    async def fetch(self, endpoint: Endpoint | str) -> Any:
        """GET ``endpoint`` and return the decoded JSON body as received."""
        target = Endpoint.parse(endpoint)
        if self._rate_limiter is not None:
            await self._rate_limiter.wait()

        try:
            response = await self._client.get(target.path, params=list(target.params) or None)
        except httpx.DecodingError as exc:
            logger.error("Fetch error for %s: %s", target, exc)
            raise DecodeFailure(f"Could not decode response body: {exc}", endpoint=str(target)) from exc
        except httpx.RequestError as exc:
            logger.error("Fetch error for %s: %s", target, exc)
            raise TransportFailure(f"Request failed: {exc}", endpoint=str(target)) from exc

        if not response.is_success:
            logger.error("Fetch error for %s: HTTP %d", target, response.status_code)
            raise StatusFailure(response.status_code, endpoint=str(target))

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Fetch error for %s: malformed JSON (%s)", target, exc)
            raise DecodeFailure(
                f"Malformed JSON body: {exc}",
                endpoint=str(target),
                status_code=response.status_code,
            ) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> DataFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
