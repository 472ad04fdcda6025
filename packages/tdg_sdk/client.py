"""Ready-wired gateway owner for applications and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import httpx

from packages.tdg_sdk.config import GatewayConfig
from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.observability import GatewayObserver, LoggingGatewayObserver
from packages.tdg_sdk.storage import BlobSink, FilesystemBlobSink
from packages.tdg_shared.config import load_settings


class TdgClient:
    """Own one ``RequestGateway`` with logging diagnostics and disk downloads.

    Connection settings resolve through ``load_settings``: explicit arguments
    win over ``TDG_API__*`` variables, which win over the YAML file at
    ``config_path`` (default ``~/.config/tdg/tdg.yaml``). Invalid settings
    raise ``pydantic.ValidationError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        *,
        download_dir: str | Path | None = None,
        config_path: str | Path | None = None,
        headers: Mapping[str, str] | None = None,
        observer: GatewayObserver | None = None,
        sink: BlobSink | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = load_settings(
            cli_params={
                "api": {
                    "base_url": base_url,
                    "timeout_seconds": timeout,
                    "download_dir": download_dir,
                }
            },
            config_path=config_path,
        )
        self._gateway = RequestGateway(
            config=GatewayConfig.from_settings(settings.api, headers=headers),
            transport=transport,
            observer=observer if observer is not None else LoggingGatewayObserver(),
            sink=sink if sink is not None else FilesystemBlobSink(root=settings.api.download_dir),
        )

    @property
    def gateway(self) -> RequestGateway:
        """Return the owned gateway for endpoint calls."""
        return self._gateway

    async def aclose(self) -> None:
        """Close the gateway's HTTP resources."""
        await self._gateway.aclose()

    async def __aenter__(self) -> TdgClient:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close resources."""
        await self.aclose()
