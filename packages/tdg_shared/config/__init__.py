"""Public API for tdg configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    ApiSettings,
    LoggingSettings,
    TdgSettings,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TIMEOUT_SECONDS",
    "ApiSettings",
    "LoggingSettings",
    "TdgSettings",
    "load_settings",
]
