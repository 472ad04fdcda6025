"""Tests for error-body classification and message derivation."""

from __future__ import annotations

import pytest

from packages.tdg_sdk import EmptyErrorBody, StructuredErrorBody, TextErrorBody
from packages.tdg_sdk.errors import decode_error_body, error_message
from packages.tdg_sdk.result import ApiResult, failed, succeeded


@pytest.mark.parametrize("decoded", [None, "", b""])
def test_decode_error_body_treats_missing_content_as_empty(decoded: object) -> None:
    """Absent bodies should map to the empty variant."""
    assert decode_error_body(decoded) == EmptyErrorBody()


def test_decode_error_body_extracts_message_and_fields() -> None:
    """Objects with a message should keep the remaining fields."""
    body = decode_error_body({"message": "name is required", "field": "name"})

    assert body == StructuredErrorBody(message="name is required", fields={"field": "name"})


def test_decode_error_body_ignores_blank_or_non_text_message() -> None:
    """Blank or non-string messages should not count as a message."""
    assert decode_error_body({"message": " "}).message is None
    assert decode_error_body({"message": 42}).message is None


def test_decode_error_body_keeps_text_and_bytes_as_text() -> None:
    """Non-object bodies should become opaque text."""
    assert decode_error_body("bad gateway") == TextErrorBody("bad gateway")
    assert decode_error_body(b"oops") == TextErrorBody("oops")
    assert decode_error_body([1, 2]) == TextErrorBody("[1, 2]")


def test_error_message_prefers_structured_message() -> None:
    """A structured message wins over any reason phrase."""
    body = StructuredErrorBody(message="name is required")

    assert error_message(body, status=400, reason_phrase="Bad Request") == "name is required"


def test_error_message_falls_back_through_reason_phrases() -> None:
    """Explicit phrase first, then the standard phrase, then a generic label."""
    assert error_message(TextErrorBody("x"), status=502, reason_phrase="Upstream") == "Upstream"
    assert error_message(EmptyErrorBody(), status=404) == "Not Found"
    assert error_message(EmptyErrorBody(), status=599) == "HTTP 599"


def test_failed_results_require_a_message() -> None:
    """Failures without a message would be indistinguishable from successes."""
    with pytest.raises(ValueError):
        failed(500, "  ")


def test_result_builders_set_flags() -> None:
    """Builders should produce consistent ok/has_payload flags."""
    ok: ApiResult[dict] = succeeded(200, {"a": 1})
    bad: ApiResult[dict] = failed(0, "connection refused")

    assert ok.ok and ok.has_payload and not ok.is_transport_failure
    assert not bad.ok and not bad.has_payload and bad.is_transport_failure
