"""Unit tests for the shared asynchronous HTTP client wrapper."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from packages.tdg_shared.http import (
    AsyncHttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
    decode_json,
    is_json_response,
    media_type,
)


def test_async_http_client_resolves_paths_under_base_url() -> None:
    """Relative paths should be appended to the base URL path."""
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True}, request=request)

    async def run() -> httpx.Response:
        async with AsyncHttpClient(
            base_url="https://example.test/tdg/api",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await client.request("GET", "/templates")

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert seen == ["https://example.test/tdg/api/templates"]


def test_async_http_client_maps_status_failure_to_typed_error() -> None:
    """Non-2xx responses should raise HttpStatusError by default."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable", request=request)

    async def run() -> None:
        async with AsyncHttpClient(
            base_url="https://example.test",
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.request("GET", "/health")

    with pytest.raises(HttpStatusError) as exc_info:
        asyncio.run(run())

    error = exc_info.value
    assert error.method == "GET"
    assert error.status_code == 503
    assert error.reason_phrase == "Service Unavailable"
    assert error.response_body == "unavailable"


def test_async_http_client_returns_error_response_when_not_raising() -> None:
    """raise_for_status=False should hand error responses back unchanged."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, request=request)

    async def run() -> httpx.Response:
        async with AsyncHttpClient(
            base_url="https://example.test",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await client.request("GET", "/missing", raise_for_status=False)

    assert asyncio.run(run()).status_code == 404


def test_async_http_client_maps_transport_failure_to_typed_error() -> None:
    """Transport exceptions should surface as HttpRequestError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run() -> None:
        async with AsyncHttpClient(
            base_url="https://example.test",
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.request("GET", "/health")

    with pytest.raises(HttpRequestError) as exc_info:
        asyncio.run(run())

    error = exc_info.value
    assert error.method == "GET"
    assert error.url == "https://example.test/health"
    assert isinstance(error.cause, httpx.ConnectError)


def test_decode_json_maps_invalid_payload_to_typed_error() -> None:
    """Malformed JSON should raise HttpJsonDecodeError."""
    request = httpx.Request("GET", "https://example.test/health")
    response = httpx.Response(
        200,
        content=b"{not-json",
        headers={"content-type": "application/json"},
        request=request,
    )

    with pytest.raises(HttpJsonDecodeError) as exc_info:
        decode_json(response)

    assert exc_info.value.status_code == 200
    assert exc_info.value.response_body == "{not-json"


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("application/json", True),
        ("application/json; charset=utf-8", True),
        ("application/problem+json", True),
        ("text/plain", False),
        ("", False),
    ],
)
def test_is_json_response_recognizes_json_like_media_types(
    content_type: str, expected: bool
) -> None:
    """JSON detection should ignore parameters and accept +json suffixes."""
    headers = {"content-type": content_type} if content_type else {}
    response = httpx.Response(200, headers=headers, content=b"")

    assert is_json_response(response) is expected


def test_media_type_lowercases_and_strips_parameters() -> None:
    """media_type should return only the bare lowercased type."""
    response = httpx.Response(200, headers={"content-type": "Text/CSV; charset=UTF-8"})

    assert media_type(response) == "text/csv"


def test_async_http_client_does_not_close_injected_client() -> None:
    """An injected httpx client should stay open after the wrapper closes."""

    async def run() -> bool:
        inner = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        wrapper = AsyncHttpClient(client=inner)
        await wrapper.aclose()
        closed = inner.is_closed
        await inner.aclose()
        return closed

    assert asyncio.run(run()) is False
