"""Minimal shared asynchronous HTTP client wrapper over httpx."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .errors import HttpJsonDecodeError, HttpRequestError, HttpStatusError

JSON_MEDIA_TYPE = "application/json"


def response_text(response: httpx.Response) -> str:
    """Return response text without raising secondary decode errors."""
    try:
        return response.text
    except Exception:  # noqa: BLE001
        return ""


def media_type(response: httpx.Response) -> str:
    """Return the lowercased media type of a response, without parameters."""
    raw = response.headers.get("content-type", "")
    return raw.split(";", 1)[0].strip().lower()


def is_json_response(response: httpx.Response) -> bool:
    """Return True when the declared content type is JSON-like."""
    value = media_type(response)
    return value == JSON_MEDIA_TYPE or value.endswith("+json")


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, mapping parse failures to ``HttpJsonDecodeError``."""
    try:
        return response.json()
    except ValueError as exc:
        raise HttpJsonDecodeError(
            message=f"Invalid JSON response for {response.request.method} {response.request.url}",
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
            response_body=response_text(response),
            cause=exc,
        ) from exc


def _status_error(response: httpx.Response) -> HttpStatusError:
    """Build a typed status error from one HTTP response."""
    status_code = response.status_code
    return HttpStatusError(
        message=f"HTTP {status_code} for {response.request.method} {response.request.url}",
        method=response.request.method,
        url=str(response.request.url),
        status_code=status_code,
        reason_phrase=response.reason_phrase,
        response_body=response_text(response),
        response_headers=dict(response.headers.items()),
    )


class AsyncHttpClient:
    """Thin asynchronous wrapper over ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create a new shared asynchronous HTTP client wrapper."""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        """Return the base URL requests are resolved against."""
        return str(self._client.base_url)

    async def aclose(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close client."""
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request and map transport/status failures to typed errors."""
        try:
            response = await self._client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as exc:
            request = _request_or_none(exc)
            request_url = str(request.url) if request is not None else url
            request_method = request.method if request is not None else method.upper()
            raise HttpRequestError(
                message=f"HTTP request failed for {request_method} {request_url}",
                method=request_method,
                url=request_url,
                cause=exc,
            ) from exc

        if raise_for_status and response.is_error:
            raise _status_error(response)
        return response


def _request_or_none(exc: httpx.RequestError) -> httpx.Request | None:
    """Return the request attached to a transport error, if any."""
    try:
        return exc.request
    except RuntimeError:
        return None
