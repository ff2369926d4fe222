"""Filesystem scanning and classification for a single directory level."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import InfrastructureError
from .types import (
    IGNORE_MARKER_FILENAME,
    DirectoryClassification,
    DirectoryEntry,
    DirectoryIdentity,
    SourceNaming,
)


def directory_identity(path: Path) -> DirectoryIdentity:
    """Return the device/inode identity of ``path``, following symlinks."""
    try:
        return DirectoryIdentity.from_stat(os.stat(path))
    except OSError as exc:
        raise InfrastructureError(f"cannot stat directory {path}: {exc}") from exc


def has_ignore_marker(directory: Path) -> bool:
    """Return whether ``directory`` holds the ignore marker file.

    Only presence matters; the marker's contents are never read.
    """
    return (directory / IGNORE_MARKER_FILENAME).exists()


def list_directory_entries(directory: Path) -> list[DirectoryEntry]:
    """List immediate children of ``directory`` in filesystem order.

    Entries are inspected without following symlinks, so a symlink to a
    directory is neither recursed into nor counted as a source file.
    """
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as scan:
            for child in scan:
                entries.append(
                    DirectoryEntry(
                        name=child.name,
                        path=Path(child.path),
                        is_dir=child.is_dir(follow_symlinks=False),
                        is_regular_file=child.is_file(follow_symlinks=False),
                    )
                )
    except OSError as exc:
        raise InfrastructureError(f"cannot list directory {directory}: {exc}") from exc
    return entries


def classify_entries(entries: Iterable[DirectoryEntry], naming: SourceNaming) -> DirectoryClassification:
    """Classify a directory from its immediate non-directory entries."""
    has_tests = False
    has_sources = False
    for entry in entries:
        if not entry.is_regular_file:
            continue
        if naming.is_test_file(entry.name):
            has_tests = True
        if naming.is_source_file(entry.name):
            has_sources = True
    return DirectoryClassification(
        has_test_sources=has_tests,
        has_buildable_sources=has_sources,
    )


__all__ = [
    "directory_identity",
    "has_ignore_marker",
    "list_directory_entries",
    "classify_entries",
]
