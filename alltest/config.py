"""Run configuration plus persisted JSON defaults.

``RunConfiguration`` is built once by the CLI and passed unchanged through
the whole traversal. The optional JSON file only supplies defaults for CLI
flags; malformed or missing config falls back to built-in values.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .directory_model import (
    DEFAULT_SOURCE_SUFFIX,
    DEFAULT_TEST_SUFFIX,
    DirectoryIdentity,
    SourceNaming,
)
from .errors import ConfigurationError
from .toolchain import DEFAULT_TOOL

APP_NAME = "alltest"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

# Conventional scratch directory; skipped by default and tolerated when absent.
DEFAULT_SKIP_NAME = "trash"


@dataclass(frozen=True)
class RunConfiguration:
    """Immutable options shared by every recursive evaluation."""

    skip_targets: frozenset[DirectoryIdentity] = frozenset()
    build_only: bool = False
    short: bool = False
    race: bool = False
    verbose: bool = False
    color: bool = False
    tool: str = DEFAULT_TOOL
    naming: SourceNaming = field(default_factory=SourceNaming)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_nonempty_string(config: dict[str, object], key: str) -> str | None:
    value = config.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_default_skip() -> str:
    """Return the default ``--skip`` value as a comma-separated string.

    Accepts either a list of strings or a comma-separated string under the
    ``skip`` key; anything else falls back to ``trash``.
    """
    value = load_config().get("skip")
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ",".join(value)
    return DEFAULT_SKIP_NAME


def load_tool_name() -> str:
    """Return the persisted tool executable, defaulting to ``go``."""
    return _load_nonempty_string(load_config(), "tool") or DEFAULT_TOOL


def load_source_naming() -> SourceNaming:
    """Return source/test suffix rules, with per-key fallback to defaults."""
    config = load_config()
    return SourceNaming(
        source_suffix=_load_nonempty_string(config, "source_suffix") or DEFAULT_SOURCE_SUFFIX,
        test_suffix=_load_nonempty_string(config, "test_suffix") or DEFAULT_TEST_SUFFIX,
    )


def parse_skip_list(raw: str) -> list[str]:
    """Split a comma-separated skip list, dropping empty items."""
    return [name for name in raw.split(",") if name]


def resolve_skip_targets(names: list[str], base: Path) -> frozenset[DirectoryIdentity]:
    """Resolve skip names (relative to ``base``) to filesystem identities.

    A missing ``trash`` directory is silently ignored. Any other name that
    cannot be stat'ed raises ``ConfigurationError``.
    """
    identities: set[DirectoryIdentity] = set()
    for name in names:
        try:
            stat = os.stat(base / name)
        except OSError as exc:
            if name == DEFAULT_SKIP_NAME:
                continue
            raise ConfigurationError(f"Couldn't stat directory to skip {name}: {exc}") from exc
        identities.add(DirectoryIdentity.from_stat(stat))
    return frozenset(identities)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_SKIP_NAME",
    "RunConfiguration",
    "load_config",
    "load_default_skip",
    "load_tool_name",
    "load_source_naming",
    "parse_skip_list",
    "resolve_skip_targets",
]
