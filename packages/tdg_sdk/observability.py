"""Optional failure hook for gateway diagnostics.

The gateway reports each failure to an observer when one is configured.
Observers never influence the returned result: exceptions they raise are
logged and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from packages.tdg_shared.logging import fields, get_logger, log_context


class FailureKind(str, Enum):
    """Where in the request lifecycle a failure happened."""

    TRANSPORT = "transport"
    DECODE = "decode"
    STATUS = "status"
    DOWNLOAD = "download"


@dataclass(frozen=True, slots=True)
class GatewayFailure:
    """Description of one failed gateway call."""

    kind: FailureKind
    method: str
    url: str
    status: int
    message: str
    filename: str | None = None


class GatewayObserver(Protocol):
    """Hook contract for gateway failure diagnostics."""

    def on_failure(self, failure: GatewayFailure) -> None:
        """Handle one failed gateway call."""


class LoggingGatewayObserver:
    """Observer that writes one structured warning per failure."""

    def __init__(self, *, logger: Any | None = None) -> None:
        self._logger = logger or get_logger("tdg_sdk.gateway")

    def on_failure(self, failure: GatewayFailure) -> None:
        """Emit a warning with the failure fields bound to the log context."""
        payload = {
            fields.EVENT: fields.GATEWAY_FAILURE_EVENT,
            fields.FAILURE_KIND: failure.kind.value,
            fields.METHOD: failure.method,
            fields.URL: failure.url,
            fields.STATUS_CODE: failure.status,
            fields.ERROR: failure.message,
            fields.FILENAME: failure.filename,
        }
        with log_context(payload):
            self._logger.warning("Gateway request failed")


def notify(observer: GatewayObserver | None, failure: GatewayFailure) -> None:
    """Deliver a failure to the observer, isolating observer errors."""
    if observer is None:
        return
    try:
        observer.on_failure(failure)
    except Exception:  # noqa: BLE001
        with log_context(
            {
                fields.EVENT: fields.OBSERVER_FAILURE_EVENT,
                fields.FAILURE_KIND: failure.kind.value,
                fields.URL: failure.url,
            }
        ):
            get_logger(__name__).exception("Gateway observer raised")
