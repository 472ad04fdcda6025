"""Uniform outcome of one gateway request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

TRANSPORT_FAILURE_STATUS = 0


@dataclass(frozen=True, slots=True)
class ApiResult(Generic[T]):
    """Status code plus either a decoded payload or an error message.

    ``status`` is ``0`` when no usable response was obtained (transport or
    decode failure). A successful call with an empty body carries neither a
    payload nor an error message.
    """

    status: int
    payload: T | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the request succeeded."""
        return self.error_message is None

    @property
    def has_payload(self) -> bool:
        """Return True when a payload is present."""
        return self.payload is not None

    @property
    def is_transport_failure(self) -> bool:
        """Return True when no usable response was obtained."""
        return self.status == TRANSPORT_FAILURE_STATUS


def succeeded(status: int, payload: T | None = None) -> ApiResult[T]:
    """Build a successful result."""
    return ApiResult(status=status, payload=payload)


def failed(status: int, message: str) -> ApiResult[T]:
    """Build a failed result; the message must be non-empty."""
    if message.strip() == "":
        raise ValueError("failed results require a non-empty error message")
    return ApiResult(status=status, error_message=message)
