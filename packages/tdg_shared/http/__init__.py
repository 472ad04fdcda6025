"""Public shared HTTP API for tdg packages."""

from .client import (
    JSON_MEDIA_TYPE,
    AsyncHttpClient,
    decode_json,
    is_json_response,
    media_type,
    response_text,
)
from .errors import (
    HttpClientError,
    HttpError,
    HttpJsonDecodeError,
    HttpRequestError,
    HttpStatusError,
)

__all__ = [
    "AsyncHttpClient",
    "HttpClientError",
    "HttpError",
    "HttpJsonDecodeError",
    "HttpRequestError",
    "HttpStatusError",
    "JSON_MEDIA_TYPE",
    "decode_json",
    "is_json_response",
    "media_type",
    "response_text",
]
