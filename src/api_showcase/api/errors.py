"""Failure types raised by the fetch pipeline."""

from __future__ import annotations


class FetchFailure(Exception):
    """A single fetch did not produce a payload."""

    def __init__(self, message: str, *, endpoint: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code


class TransportFailure(FetchFailure):
    """The exchange could not complete (unreachable host, timeout, reset)."""


class StatusFailure(FetchFailure):
    """The server answered with a non-success status code."""

    def __init__(self, code: int, *, endpoint: str | None = None) -> None:
        super().__init__(f"HTTP error! status: {code}", endpoint=endpoint, status_code=code)
        self.code = code


class DecodeFailure(FetchFailure):
    """The body could not be decoded as JSON."""


class EmptyQueryError(ValueError):
    """A search was requested with a blank query."""


def is_transient(exc: Exception) -> bool:
    """Whether a failure is worth retrying: transport errors and 5xx/429 responses."""
    if isinstance(exc, TransportFailure):
        return True
    if isinstance(exc, StatusFailure):
        return exc.code >= 500 or exc.code == 429
    return False
