"""Domain datatypes for per-directory scan results."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

IGNORE_MARKER_FILENAME = ".alltestignore"
DEFAULT_SOURCE_SUFFIX = ".go"
DEFAULT_TEST_SUFFIX = "_test.go"


@dataclass(frozen=True)
class DirectoryIdentity:
    """Filesystem identity of a directory, independent of how it was spelled."""

    device: int
    inode: int

    @classmethod
    def from_stat(cls, stat: os.stat_result) -> DirectoryIdentity:
        return cls(device=int(stat.st_dev), inode=int(stat.st_ino))


@dataclass(frozen=True)
class SourceNaming:
    """File-name suffix rules for buildable and test sources."""

    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    test_suffix: str = DEFAULT_TEST_SUFFIX

    def is_test_file(self, name: str) -> bool:
        return name.endswith(self.test_suffix)

    def is_source_file(self, name: str) -> bool:
        return name.endswith(self.source_suffix)


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate directory child as seen without following symlinks."""

    name: str
    path: Path
    is_dir: bool
    is_regular_file: bool


@dataclass(frozen=True)
class DirectoryClassification:
    """What kinds of sources sit directly inside one directory."""

    has_test_sources: bool = False
    has_buildable_sources: bool = False


__all__ = [
    "IGNORE_MARKER_FILENAME",
    "DEFAULT_SOURCE_SUFFIX",
    "DEFAULT_TEST_SUFFIX",
    "DirectoryIdentity",
    "SourceNaming",
    "DirectoryEntry",
    "DirectoryClassification",
]
