"""Public logging API for tdg packages.

Wraps Python's ``logging`` module with a single-handler setup and scoped
structured fields.
"""

from .config import ContextFilter, JsonFormatter, PlainFormatter, configure_logging, get_logger
from .context import get_context, log_context

__all__ = [
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
]
