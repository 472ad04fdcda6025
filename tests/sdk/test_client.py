"""Tests for SDK client wiring and gateway configuration resolution."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx
import pytest

from packages.tdg_sdk import (
    FailureKind,
    GatewayFailure,
    LoggingGatewayObserver,
    TdgClient,
    get_template,
)
from packages.tdg_shared.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from packages.tdg_shared.logging import get_context


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove host TDG_API__* variables so settings stay deterministic."""
    for name in ("TDG_API__BASE_URL", "TDG_API__TIMEOUT_SECONDS", "TDG_API__DOWNLOAD_DIR"):
        monkeypatch.delenv(name, raising=False)


def _close(client: TdgClient) -> None:
    asyncio.run(client.aclose())


def test_client_reads_api_settings_from_yaml(tmp_path: Path) -> None:
    """Without arguments the client should use the settings file."""
    config_file = tmp_path / "tdg.yaml"
    config_file.write_text(
        "api:\n  base_url: http://yaml.test/tdg/api/\n  timeout_seconds: 7\n",
        encoding="utf-8",
    )

    client = TdgClient(config_path=config_file)
    try:
        assert client.gateway.config.base_url == "http://yaml.test/tdg/api"
        assert client.gateway.config.timeout_seconds == 7
    finally:
        _close(client)


def test_client_prefers_arguments_then_env_over_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Explicit arguments beat the environment, which beats the file."""
    config_file = tmp_path / "tdg.yaml"
    config_file.write_text(
        "api:\n  base_url: http://yaml.test/api\n  timeout_seconds: 7\n", encoding="utf-8"
    )
    monkeypatch.setenv("TDG_API__BASE_URL", "http://env.test/api")
    monkeypatch.setenv("TDG_API__TIMEOUT_SECONDS", "4.5")

    from_env = TdgClient(config_path=config_file)
    explicit = TdgClient("http://explicit.test/api", 1.0, config_path=config_file)
    try:
        assert from_env.gateway.config.base_url == "http://env.test/api"
        assert from_env.gateway.config.timeout_seconds == 4.5
        assert explicit.gateway.config.base_url == "http://explicit.test/api"
        assert explicit.gateway.config.timeout_seconds == 1.0
    finally:
        _close(from_env)
        _close(explicit)


def test_client_treats_blank_env_as_unset(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An empty TDG_API__BASE_URL should fall back to the default."""
    monkeypatch.setenv("TDG_API__BASE_URL", "")

    client = TdgClient(config_path=tmp_path / "missing.yaml")
    try:
        assert client.gateway.config.base_url == DEFAULT_BASE_URL
        assert client.gateway.config.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    finally:
        _close(client)



def test_client_builds_gateway_with_resolved_config(tmp_path: Path) -> None:
    """The client should capture base URL, timeout, and headers in its gateway."""
    client = TdgClient(
        "http://tdg.test/api/",
        3.0,
        download_dir=tmp_path,
        config_path=tmp_path / "missing.yaml",
        headers={"X-Team": "qa"},
        transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )
    try:
        config = client.gateway.config
        assert config.base_url == "http://tdg.test/api"
        assert config.timeout_seconds == 3.0
        assert dict(config.headers) == {"X-Team": "qa"}
    finally:
        asyncio.run(client.aclose())


def test_client_download_writes_into_download_dir(tmp_path: Path) -> None:
    """The default sink should write into the configured directory."""

    async def run() -> bool:
        async with TdgClient(
            "http://tdg.test/api",
            download_dir=tmp_path,
            config_path=tmp_path / "missing.yaml",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"a,b")),
        ) as client:
            return await client.gateway.download("/generate/1", "data.csv")

    assert asyncio.run(run()) is True
    assert (tmp_path / "data.csv").read_bytes() == b"a,b"


def test_client_logs_failures_by_default(
    caplog: pytest.LogCaptureFixture, tmp_path: Path
) -> None:
    """The default observer should log one warning per failed call."""

    async def run():
        async with TdgClient(
            "http://tdg.test/api",
            config_path=tmp_path / "missing.yaml",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        ) as client:
            return await get_template(client.gateway, 1)

    with caplog.at_level(logging.WARNING, logger="tdg_sdk.gateway"):
        result = asyncio.run(run())

    assert result.status == 500
    records = [record for record in caplog.records if record.name == "tdg_sdk.gateway"]
    assert len(records) == 1
    assert records[0].getMessage() == "Gateway request failed"


def test_logging_observer_binds_failure_fields() -> None:
    """Failure details should be attached as log context."""
    captured: list[dict[str, str]] = []

    class _Capture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            captured.append(get_context())

    logger = logging.getLogger("tdg_sdk.test_observer")
    logger.setLevel(logging.WARNING)
    handler = _Capture()
    logger.addHandler(handler)
    try:
        LoggingGatewayObserver(logger=logger).on_failure(
            GatewayFailure(
                kind=FailureKind.DOWNLOAD,
                method="GET",
                url="http://tdg.test/api/batch/download/b1",
                status=404,
                message="Download failed: Not Found",
                filename="batch_b1.zip",
            )
        )
    finally:
        logger.removeHandler(handler)

    assert captured[0]["failure_kind"] == "download"
    assert captured[0]["status_code"] == "404"
    assert captured[0]["filename"] == "batch_b1.zip"
