"""Recursive per-directory test/build decision engine.

Each directory is skipped, tested, built, or left alone based only on its own
immediate files and the run configuration. Failures from subdirectories are
appended before the directory's own result, giving depth-first order.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from .config import DEFAULT_SKIP_NAME, RunConfiguration
from .directory_model import (
    DirectoryClassification,
    classify_entries,
    directory_identity,
    has_ignore_marker,
    list_directory_entries,
)
from .reporting import RunLog, get_logger
from .toolchain import (
    ToolAction,
    ToolInvocation,
    ToolResult,
    build_invocation,
    run_tests_invocation,
    run_tool,
    trim_trailing_newline,
)

ToolRunner = Callable[[str, Path, ToolInvocation], ToolResult]


def relative_display_path(root: Path, directory: Path) -> str:
    """Return ``directory`` relative to ``root``; the root itself is ``.``."""
    return os.path.relpath(directory, root)


def choose_invocation(
    classification: DirectoryClassification,
    config: RunConfiguration,
) -> ToolInvocation | None:
    """Pick the tool action for one directory, or ``None`` for no action."""
    if classification.has_test_sources and not config.build_only:
        return run_tests_invocation(short=config.short, race=config.race)
    if classification.has_buildable_sources:
        return build_invocation()
    return None


class DirectoryEvaluator:
    """Walk a tree and run the external tool where sources are found."""

    def __init__(
        self,
        config: RunConfiguration,
        run_tool: ToolRunner = run_tool,
        log: RunLog | None = None,
    ) -> None:
        self.config = config
        self._run_tool = run_tool
        self._log = log if log is not None else get_logger()

    def evaluate(self, root: Path, current: Path | None = None) -> list[str]:
        """Return failed directories under ``current`` relative to ``root``.

        ``InfrastructureError`` from listing, stat or tool start propagates
        unchanged and aborts the traversal.
        """
        directory = root if current is None else current
        rel = relative_display_path(root, directory)

        if self._should_skip(directory, rel):
            return []

        failures: list[str] = []
        entries = list_directory_entries(directory)
        for entry in entries:
            if entry.is_dir:
                failures.extend(self.evaluate(root, entry.path))

        invocation = choose_invocation(classify_entries(entries, self.config.naming), self.config)
        if invocation is None:
            return failures

        if self._run_in_directory(directory, rel, invocation):
            return failures
        failures.append(rel)
        return failures

    def _should_skip(self, directory: Path, rel: str) -> bool:
        if DEFAULT_SKIP_NAME in rel:
            return True
        if directory_identity(directory) in self.config.skip_targets:
            self._log.debug("skipping directory %s as requested", rel)
            return True
        if has_ignore_marker(directory):
            self._log.debug("skipping directory %s as requested due to ignore file", rel)
            return True
        return False

    def _run_in_directory(self, directory: Path, rel: str, invocation: ToolInvocation) -> bool:
        """Run the tool and report its result; return whether it succeeded."""
        if self.config.verbose:
            if invocation.action is ToolAction.TEST:
                self._log.debug("Running tests in %s", rel)
            else:
                self._log.debug("Building in %s", rel)

        result = self._run_tool(self.config.tool, directory, invocation)
        output = trim_trailing_newline(result.output)

        if not result.success:
            if output:
                self._log.error("%s", output)
            self._log.error("Failed: %s", rel)
            return False

        if self.config.verbose and output:
            self._log.debug("%s", output)
            self._log.info("Success %s", rel)
        return True


__all__ = [
    "ToolRunner",
    "relative_display_path",
    "choose_invocation",
    "DirectoryEvaluator",
]
