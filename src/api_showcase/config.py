"""Configuration loading for the API showcase client."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    api_base_url: str = DEFAULT_BASE_URL
    request_timeout_seconds: float = 10.0
    max_attempts: int = 3
    retry_backoff_seconds: float = 1.0
    retry_transient_only: bool = False
    requests_per_minute: int = 0
    user_agent: str = "api-showcase/0.1"
    log_level: str = "INFO"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def load_config() -> AppConfig:
    # override=True ensures the .env file takes precedence over stale shell variables
    load_dotenv(override=True)

    base_url = os.getenv("API_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/")
    if not base_url:
        raise ValueError("API_BASE_URL must not be empty.")

    max_attempts = int(os.getenv("MAX_ATTEMPTS", "3"))
    if max_attempts < 1:
        raise ValueError(f"MAX_ATTEMPTS must be a positive integer, got {max_attempts}.")

    backoff = float(os.getenv("RETRY_BACKOFF_SECONDS", "1.0"))
    if backoff < 0:
        raise ValueError(f"RETRY_BACKOFF_SECONDS must not be negative, got {backoff}.")

    timeout = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10.0"))
    if timeout <= 0:
        raise ValueError(f"REQUEST_TIMEOUT_SECONDS must be positive, got {timeout}.")

    requests_per_minute = int(os.getenv("REQUESTS_PER_MINUTE", "0"))
    if requests_per_minute < 0:
        raise ValueError("REQUESTS_PER_MINUTE must be zero (unbounded) or positive.")

    return AppConfig(
        api_base_url=base_url,
        request_timeout_seconds=timeout,
        max_attempts=max_attempts,
        retry_backoff_seconds=backoff,
        retry_transient_only=_env_bool("RETRY_TRANSIENT_ONLY", "false"),
        requests_per_minute=requests_per_minute,
        user_agent=os.getenv("USER_AGENT", "api-showcase/0.1"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
