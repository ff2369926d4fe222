"""Domain model for one directory level of the traversal.

This package contains non-recursive primitives:
- identity, entry and classification datatypes
- immediate-entry listing and ignore-marker probing
- source/test naming rules
"""

from __future__ import annotations

from .types import (
    DEFAULT_SOURCE_SUFFIX,
    DEFAULT_TEST_SUFFIX,
    IGNORE_MARKER_FILENAME,
    DirectoryClassification,
    DirectoryEntry,
    DirectoryIdentity,
    SourceNaming,
)
from .fs import classify_entries, directory_identity, has_ignore_marker, list_directory_entries

__all__ = [
    "DEFAULT_SOURCE_SUFFIX",
    "DEFAULT_TEST_SUFFIX",
    "IGNORE_MARKER_FILENAME",
    "DirectoryClassification",
    "DirectoryEntry",
    "DirectoryIdentity",
    "SourceNaming",
    "classify_entries",
    "directory_identity",
    "has_ignore_marker",
    "list_directory_entries",
]
