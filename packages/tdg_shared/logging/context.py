"""Scoped structured fields for log records.

``log_context`` binds fields for one block; ``ContextFilter`` copies them onto
every record emitted inside it.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_SCOPED_FIELDS: ContextVar[Mapping[str, str]] = ContextVar("tdg_log_fields", default={})


def get_context() -> dict[str, str]:
    """Return the fields bound by enclosing ``log_context`` blocks."""
    return dict(_SCOPED_FIELDS.get())


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Layer stringified fields over the enclosing scope; ``None`` is skipped."""
    merged = {
        **_SCOPED_FIELDS.get(),
        **{str(key): str(value) for key, value in values.items() if value is not None},
    }
    token = _SCOPED_FIELDS.set(merged)
    try:
        yield
    finally:
        _SCOPED_FIELDS.reset(token)
