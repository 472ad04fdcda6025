"""Shared fixtures for SDK gateway and endpoint tests."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from packages.tdg_sdk import GatewayConfig, GatewayFailure, RequestGateway

BASE_URL = "https://tdg.test/tdg/api"

Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class RecordingSink:
    """Blob sink that keeps saves in memory, optionally failing."""

    saved: list[tuple[str, bytes]] = field(default_factory=list)
    error: Exception | None = None

    def save(self, *, filename: str, content: bytes) -> None:
        if self.error is not None:
            raise self.error
        self.saved.append((filename, content))


@dataclass
class RecordingObserver:
    """Observer that records every reported failure."""

    failures: list[GatewayFailure] = field(default_factory=list)

    def on_failure(self, failure: GatewayFailure) -> None:
        self.failures.append(failure)


@dataclass
class GatewayHarness:
    """Gateway wired to a stub transport plus recording collaborators."""

    gateway: RequestGateway
    sink: RecordingSink
    observer: RecordingObserver
    requests: list[httpx.Request]

    def run(self, call: Callable[[RequestGateway], Awaitable[Any]]) -> Any:
        """Drive one async gateway interaction to completion."""
        return asyncio.run(call(self.gateway))


@pytest.fixture
def make_gateway() -> Iterator[Callable[[Handler], GatewayHarness]]:
    """Return a factory building gateways around a request handler."""
    harnesses: list[GatewayHarness] = []

    def factory(handler: Handler) -> GatewayHarness:
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        sink = RecordingSink()
        observer = RecordingObserver()
        gateway = RequestGateway(
            config=GatewayConfig(base_url=BASE_URL, timeout_seconds=5.0),
            transport=httpx.MockTransport(recording_handler),
            observer=observer,
            sink=sink,
        )
        harness = GatewayHarness(
            gateway=gateway, sink=sink, observer=observer, requests=requests
        )
        harnesses.append(harness)
        return harness

    yield factory

    for harness in harnesses:
        asyncio.run(harness.gateway.aclose())
