"""Runtime configuration primitives for tdg SDK gateways."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from packages.tdg_shared.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, ApiSettings


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Immutable connection settings captured when a gateway is built."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(
        cls, settings: ApiSettings, *, headers: Mapping[str, str] | None = None
    ) -> GatewayConfig:
        """Capture the resolved ``api`` settings subtree."""
        return cls(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            headers=dict(headers or {}),
        )
