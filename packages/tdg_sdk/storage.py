"""Blob sinks that make downloaded content available to the user."""

from __future__ import annotations

import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Protocol


class BlobSink(Protocol):
    """Persist one named binary blob to user-visible storage."""

    def save(self, *, filename: str, content: bytes) -> None:
        """Store ``content`` under ``filename``; raise ``OSError`` on failure."""


class FilesystemBlobSink:
    """Write downloads into one directory using atomic replace."""

    def __init__(self, *, root: str | Path, temp_prefix: str = "tdg-download") -> None:
        self._root = Path(root)
        self._temp_prefix = temp_prefix

    @property
    def root(self) -> Path:
        """Return the download directory."""
        return self._root

    def resolve_path(self, filename: str) -> Path:
        """Resolve a bare filename inside the download directory."""
        name = Path(filename).name
        if name in ("", ".", ".."):
            raise ValueError(f"invalid download filename: {filename!r}")
        return self._root / name

    def save(self, *, filename: str, content: bytes) -> None:
        """Write one blob atomically, replacing any previous file."""
        path = self.resolve_path(filename)
        self._root.mkdir(parents=True, exist_ok=True)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                prefix=f".{self._temp_prefix}-",
                suffix=".tmp",
                dir=self._root,
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(content)
                handle.flush()
            os.replace(tmp_path, path)
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
