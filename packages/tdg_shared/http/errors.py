"""Typed errors for the shared HTTP client wrapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class HttpError(Exception):
    """Base error type for shared HTTP helper failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class HttpClientError(HttpError):
    """Base error for outbound HTTP client call failures."""

    method: str
    url: str


@dataclass(frozen=True)
class HttpRequestError(HttpClientError):
    """Transport-level failure before any response was received."""

    cause: Exception | None = None


@dataclass(frozen=True)
class HttpStatusError(HttpClientError):
    """Non-success status code failure."""

    status_code: int = 0
    reason_phrase: str = ""
    response_body: str = ""
    response_headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HttpJsonDecodeError(HttpClientError):
    """Response declared or was expected to carry JSON but did not."""

    status_code: int = 0
    response_body: str = ""
    cause: Exception | None = None
