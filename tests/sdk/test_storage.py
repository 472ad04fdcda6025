"""Tests for the filesystem blob sink."""

from __future__ import annotations

from pathlib import Path

import pytest

from packages.tdg_sdk import FilesystemBlobSink


def test_save_writes_content_and_creates_directory(tmp_path: Path) -> None:
    """Saving should create the root and write the exact bytes."""
    sink = FilesystemBlobSink(root=tmp_path / "downloads")

    sink.save(filename="batch_b1.zip", content=b"PK\x03\x04")

    assert (tmp_path / "downloads" / "batch_b1.zip").read_bytes() == b"PK\x03\x04"


def test_save_replaces_existing_file_without_leftovers(tmp_path: Path) -> None:
    """A second save should replace the file and leave no temp files."""
    sink = FilesystemBlobSink(root=tmp_path)

    sink.save(filename="data.csv", content=b"old")
    sink.save(filename="data.csv", content=b"new")

    assert (tmp_path / "data.csv").read_bytes() == b"new"
    assert [path.name for path in tmp_path.iterdir()] == ["data.csv"]


def test_resolve_path_keeps_only_the_basename(tmp_path: Path) -> None:
    """Directory components in a filename must not escape the root."""
    sink = FilesystemBlobSink(root=tmp_path)

    assert sink.resolve_path("../../etc/data.csv") == tmp_path / "data.csv"


@pytest.mark.parametrize("filename", ["", ".", ".."])
def test_resolve_path_rejects_empty_names(tmp_path: Path, filename: str) -> None:
    """Names that do not denote a file should be rejected."""
    with pytest.raises(ValueError):
        FilesystemBlobSink(root=tmp_path).resolve_path(filename)
