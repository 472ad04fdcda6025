"""Request gateway: one call in, one normalized ``ApiResult`` out.

Every request-time failure (unreachable host, non-2xx status, undecodable
body) is returned as data. Only programmer errors propagate.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, TypeVar

import httpx

from packages.tdg_shared.http import (
    AsyncHttpClient,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
    decode_json,
    is_json_response,
    response_text,
)
from packages.tdg_sdk.config import GatewayConfig
from packages.tdg_sdk.errors import decode_error_body, error_message
from packages.tdg_sdk.observability import (
    FailureKind,
    GatewayFailure,
    GatewayObserver,
    notify,
)
from packages.tdg_sdk.request import (
    DEFAULT_UPLOAD_FIELD,
    FormFile,
    HttpMethod,
    RequestSpec,
    ResponseKind,
    as_body,
    build_headers,
    build_query_params,
    transport_kwargs,
    upload_body,
)
from packages.tdg_sdk.result import (
    TRANSPORT_FAILURE_STATUS,
    ApiResult,
    failed,
    succeeded,
)
from packages.tdg_sdk.storage import BlobSink, FilesystemBlobSink

T = TypeVar("T")

Decoder = Callable[[Any], T]
QueryParams = Mapping[str, str | None]

NO_CONTENT_STATUS = 204


class RequestGateway:
    """Issue requests against one base URL and normalize their outcomes."""

    def __init__(
        self,
        *,
        config: GatewayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http: AsyncHttpClient | None = None,
        observer: GatewayObserver | None = None,
        sink: BlobSink | None = None,
    ) -> None:
        """Create a gateway; ``http`` or ``transport`` may be injected for tests."""
        self._config = GatewayConfig() if config is None else config
        self._owns_http = http is None
        self._http = http or AsyncHttpClient(
            base_url=self._config.base_url,
            timeout_seconds=self._config.timeout_seconds,
            headers=self._config.headers,
            transport=transport,
        )
        self._observer = observer
        self._sink = sink or FilesystemBlobSink(root=Path.cwd())

    @property
    def config(self) -> GatewayConfig:
        """Return the configuration captured at construction."""
        return self._config

    async def aclose(self) -> None:
        """Close the owned HTTP client."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> RequestGateway:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close resources."""
        await self.aclose()

    async def execute(
        self,
        spec: RequestSpec,
        *,
        decode: Decoder[T] | None = None,
        response_kind: ResponseKind = ResponseKind.AUTO,
    ) -> ApiResult[T]:
        """Perform one request and normalize the response into an ``ApiResult``.

        Args:
            spec: Verb, path, query, body, and header overrides.
            decode: Optional conversion applied to a successful payload, such
                as a pydantic ``model_validate``. A ``ValueError`` raised here
                is treated as a decode failure.
            response_kind: ``BINARY`` returns the raw bytes of a successful
                response instead of decoding JSON/text.
        """
        method = spec.method.value
        try:
            response = await self._http.request(
                method,
                spec.path,
                raise_for_status=False,
                params=list(spec.params),
                headers=build_headers(spec.headers, spec.body),
                **transport_kwargs(spec.body),
            )
        except HttpRequestError as exc:
            message = _transport_message(exc)
            self._report(FailureKind.TRANSPORT, method, exc.url, TRANSPORT_FAILURE_STATUS, message)
            return failed(TRANSPORT_FAILURE_STATUS, message)

        url = str(response.request.url)
        try:
            decoded = _decode_body(response, response_kind)
            if not response.is_success:
                message = error_message(
                    decode_error_body(decoded),
                    status=response.status_code,
                    reason_phrase=response.reason_phrase,
                )
                self._report(FailureKind.STATUS, method, url, response.status_code, message)
                return failed(response.status_code, message)
            payload = decode(decoded) if decode is not None and decoded is not None else decoded
        except (HttpJsonDecodeError, ValueError) as exc:
            message = f"Could not decode response from {method} {url}: {exc}"
            self._report(FailureKind.DECODE, method, url, TRANSPORT_FAILURE_STATUS, message)
            return failed(TRANSPORT_FAILURE_STATUS, message)

        return succeeded(response.status_code, payload)

    async def get(
        self,
        path: str,
        params: QueryParams | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
        response_kind: ResponseKind = ResponseKind.AUTO,
    ) -> ApiResult[T]:
        """Fetch ``path`` with GET."""
        spec = RequestSpec(
            method=HttpMethod.GET,
            path=path,
            params=build_query_params(params),
            headers=headers or {},
        )
        return await self.execute(spec, decode=decode, response_kind=response_kind)

    async def post(
        self,
        path: str,
        body: Any = None,
        params: QueryParams | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
        response_kind: ResponseKind = ResponseKind.AUTO,
    ) -> ApiResult[T]:
        """Submit ``body`` to ``path`` with POST."""
        spec = RequestSpec(
            method=HttpMethod.POST,
            path=path,
            params=build_query_params(params),
            body=as_body(body),
            headers=headers or {},
        )
        return await self.execute(spec, decode=decode, response_kind=response_kind)

    async def put(
        self,
        path: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
    ) -> ApiResult[T]:
        """Submit ``body`` to ``path`` with PUT."""
        spec = RequestSpec(
            method=HttpMethod.PUT,
            path=path,
            body=as_body(body),
            headers=headers or {},
        )
        return await self.execute(spec, decode=decode)

    async def delete(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
    ) -> ApiResult[T]:
        """Issue DELETE against ``path``."""
        spec = RequestSpec(method=HttpMethod.DELETE, path=path, headers=headers or {})
        return await self.execute(spec, decode=decode)

    async def upload(
        self,
        path: str,
        file: FormFile,
        *,
        field_name: str = DEFAULT_UPLOAD_FIELD,
        fields: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
    ) -> ApiResult[T]:
        """POST one file, plus optional string fields, as a multipart form."""
        spec = RequestSpec(
            method=HttpMethod.POST,
            path=path,
            body=upload_body(file, field_name=field_name, fields=fields),
        )
        return await self.execute(spec, decode=decode)

    async def download(
        self,
        path: str,
        filename: str,
        params: QueryParams | None = None,
    ) -> bool:
        """GET binary content and hand it to the blob sink under ``filename``.

        Returns False on any failure instead of a result object.
        """
        method = HttpMethod.GET.value
        try:
            response = await self._http.request(
                method,
                path,
                params=list(build_query_params(params)),
            )
        except HttpRequestError as exc:
            self._report_download(exc.url, TRANSPORT_FAILURE_STATUS, _transport_message(exc), filename)
            return False
        except HttpStatusError as exc:
            reason = exc.reason_phrase or f"HTTP {exc.status_code}"
            self._report_download(exc.url, exc.status_code, f"Download failed: {reason}", filename)
            return False

        url = str(response.request.url)
        if not response.is_success:
            message = f"Download failed: unexpected status {response.status_code}"
            self._report_download(url, response.status_code, message, filename)
            return False

        try:
            self._sink.save(filename=filename, content=response.content)
        except (OSError, ValueError) as exc:
            self._report_download(url, response.status_code, f"Could not save download: {exc}", filename)
            return False
        return True

    def _report(
        self, kind: FailureKind, method: str, url: str, status: int, message: str
    ) -> None:
        """Forward one failure to the observer."""
        notify(
            self._observer,
            GatewayFailure(kind=kind, method=method, url=url, status=status, message=message),
        )

    def _report_download(self, url: str, status: int, message: str, filename: str) -> None:
        """Forward one download failure to the observer."""
        notify(
            self._observer,
            GatewayFailure(
                kind=FailureKind.DOWNLOAD,
                method=HttpMethod.GET.value,
                url=url,
                status=status,
                message=message,
                filename=filename,
            ),
        )


def _decode_body(response: httpx.Response, response_kind: ResponseKind) -> Any:
    """Decode a body by declared content type; empty bodies decode to ``None``."""
    if response.status_code == NO_CONTENT_STATUS:
        return None
    if response_kind is ResponseKind.BINARY and response.is_success:
        return response.content or None
    if response.content == b"":
        return None
    if is_json_response(response):
        return decode_json(response)
    return response_text(response)


def _transport_message(exc: HttpRequestError) -> str:
    """Return a human-readable transport failure description."""
    cause = str(exc.cause) if exc.cause is not None else ""
    return cause if cause.strip() != "" else exc.message or "Network error"
