"""Decoded error bodies and error-message derivation for failed responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping, TypeAlias


@dataclass(frozen=True, slots=True)
class StructuredErrorBody:
    """JSON object error body, optionally carrying a ``message`` field."""

    message: str | None
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TextErrorBody:
    """Non-object error body kept as text."""

    text: str


@dataclass(frozen=True, slots=True)
class EmptyErrorBody:
    """Failure response without a body."""


ErrorBody: TypeAlias = StructuredErrorBody | TextErrorBody | EmptyErrorBody


def decode_error_body(decoded: Any) -> ErrorBody:
    """Classify an already-decoded response body into one error body variant."""
    match decoded:
        case None | "" | b"":
            return EmptyErrorBody()
        case {"message": str(message), **rest} if message.strip() != "":
            return StructuredErrorBody(message=message, fields=dict(rest))
        case dict():
            return StructuredErrorBody(message=None, fields=dict(decoded))
        case str(text):
            return TextErrorBody(text=text)
        case bytes(raw):
            return TextErrorBody(text=raw.decode("utf-8", errors="replace"))
        case _:
            return TextErrorBody(text=str(decoded))


def error_message(body: ErrorBody, *, status: int, reason_phrase: str = "") -> str:
    """Return the body ``message`` when present, else the status reason phrase."""
    match body:
        case StructuredErrorBody(message=str(message)):
            return message
        case _:
            return _reason_phrase(status, reason_phrase)


def _reason_phrase(status: int, reason_phrase: str) -> str:
    """Return a non-empty reason phrase for a status code."""
    if reason_phrase.strip() != "":
        return reason_phrase
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"HTTP {status}"
