"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/tdg/tdg.yaml
4) Model defaults

Environment variable format:
- Prefix: ``TDG_``
- Nested keys: ``__`` separator
- Example: ``TDG_API__BASE_URL=http://tdg.internal/tdg/api`` -> ``api.base_url``
- Empty variables count as unset
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, TdgSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> TdgSettings:
    """Resolve settings from CLI params, environment, YAML file, and defaults."""
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _FileBoundSettings(TdgSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _FileBoundSettings(**_drop_unset(cli_params or {}))


def _drop_unset(values: Mapping[str, Any]) -> dict[str, Any]:
    """Remove ``None`` leaves so unset CLI options never mask lower sources."""
    output: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, Mapping):
            nested = _drop_unset(value)
            if nested:
                output[key] = nested
            continue
        if value is not None:
            output[key] = value
    return output
