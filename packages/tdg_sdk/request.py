"""Request shapes and builders for the gateway.

Bodies are a closed sum: ``JsonBody`` for structured data and ``FormBody`` for
multipart uploads. Everything here is pure; nothing touches the network.
"""

from __future__ import annotations

import json
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, TypeAlias

import httpx

from packages.tdg_sdk.models import WireModel
from packages.tdg_shared.http import JSON_MEDIA_TYPE

DEFAULT_UPLOAD_FIELD = "file"
OCTET_STREAM = "application/octet-stream"


class HttpMethod(str, Enum):
    """Verbs the backend exposes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ResponseKind(str, Enum):
    """How a successful response body should be decoded."""

    AUTO = "auto"
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class FormFile:
    """One file part of a multipart form."""

    filename: str
    content: bytes
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: str | Path, *, content_type: str | None = None) -> FormFile:
        """Read one file from disk, guessing its media type from the suffix."""
        resolved = Path(path)
        guessed, _ = mimetypes.guess_type(resolved.name)
        return cls(
            filename=resolved.name,
            content=resolved.read_bytes(),
            content_type=content_type or guessed,
        )


@dataclass(frozen=True, slots=True)
class JsonBody:
    """Structured request body, serialized as JSON."""

    data: Any


@dataclass(frozen=True, slots=True)
class FormBody:
    """Multipart request body; the transport supplies the boundary header."""

    files: tuple[tuple[str, FormFile], ...] = ()
    fields: tuple[tuple[str, str], ...] = ()


RequestBody: TypeAlias = JsonBody | FormBody


@dataclass(frozen=True, slots=True)
class RequestSpec:
    """Everything needed to issue one request against the base URL."""

    method: HttpMethod
    path: str
    params: tuple[tuple[str, str], ...] = ()
    body: RequestBody | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


def build_query_params(
    params: Mapping[str, str | None] | None,
) -> tuple[tuple[str, str], ...]:
    """Return query pairs in insertion order, omitting ``None`` values."""
    if not params:
        return ()
    return tuple((str(key), str(value)) for key, value in params.items() if value is not None)


def query_value(value: object | None) -> str | None:
    """Stringify one optional query value; ``None`` stays unset."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_headers(
    overrides: Mapping[str, str] | None, body: RequestBody | None
) -> httpx.Headers:
    """Compose request headers: Accept default, caller overrides, then body rule."""
    headers = httpx.Headers({"Accept": JSON_MEDIA_TYPE})
    for key, value in (overrides or {}).items():
        headers[key] = value

    if isinstance(body, FormBody):
        headers.pop("Content-Type", None)
    elif isinstance(body, JsonBody):
        headers["Content-Type"] = JSON_MEDIA_TYPE
    return headers


def as_body(value: Any) -> RequestBody | None:
    """Coerce a caller value into a request body variant."""
    if value is None or isinstance(value, (JsonBody, FormBody)):
        return value
    if isinstance(value, WireModel):
        return JsonBody(value.to_wire())
    return JsonBody(value)


def upload_body(
    file: FormFile,
    *,
    field_name: str = DEFAULT_UPLOAD_FIELD,
    fields: Mapping[str, str] | None = None,
) -> FormBody:
    """Build a multipart body from one file field plus flat string fields."""
    return FormBody(
        files=((field_name, file),),
        fields=tuple((str(key), str(value)) for key, value in (fields or {}).items()),
    )


def transport_kwargs(body: RequestBody | None) -> dict[str, Any]:
    """Map a body variant to ``httpx`` request keyword arguments."""
    if body is None:
        return {}
    if isinstance(body, JsonBody):
        return {"content": json.dumps(body.data, separators=(",", ":")).encode("utf-8")}
    files = [
        (name, (part.filename, part.content, part.content_type or OCTET_STREAM))
        for name, part in body.files
    ]
    kwargs: dict[str, Any] = {"data": dict(body.fields)}
    if files:
        kwargs["files"] = files
    return kwargs
