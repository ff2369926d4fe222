"""External build/test tool invocation.

The tool is opaque: it runs in a target directory in ``test`` or ``build``
mode and reports success plus merged stdout/stderr text.
"""

from __future__ import annotations

import enum
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import InfrastructureError

DEFAULT_TOOL = "go"
SHORT_MODIFIER = "-short"
RACE_MODIFIER = "-race"


class ToolAction(enum.Enum):
    TEST = "test"
    BUILD = "build"


@dataclass(frozen=True)
class ToolInvocation:
    """Action plus modifiers passed to the tool, e.g. ``test -short``."""

    action: ToolAction
    modifiers: tuple[str, ...] = ()

    def argv(self, tool: str) -> list[str]:
        return [tool, self.action.value, *self.modifiers]

    def describe(self) -> str:
        return " ".join((self.action.value, *self.modifiers))


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool run."""

    success: bool
    output: str
    returncode: int


def run_tests_invocation(short: bool = False, race: bool = False) -> ToolInvocation:
    modifiers: list[str] = []
    if short:
        modifiers.append(SHORT_MODIFIER)
    if race:
        modifiers.append(RACE_MODIFIER)
    return ToolInvocation(ToolAction.TEST, tuple(modifiers))


def build_invocation() -> ToolInvocation:
    return ToolInvocation(ToolAction.BUILD)


def trim_trailing_newline(text: str) -> str:
    """Drop exactly one trailing ``\\n`` if present."""
    if text.endswith("\n"):
        return text[:-1]
    return text


def run_tool(tool: str, directory: Path, invocation: ToolInvocation) -> ToolResult:
    """Run ``tool`` in ``directory`` and block until it exits.

    A non-zero exit is a normal failed result. Failing to start the tool at
    all (missing executable, unusable working directory) raises
    ``InfrastructureError``. There is no timeout.
    """
    try:
        proc = subprocess.run(
            invocation.argv(tool),
            cwd=directory,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise InfrastructureError(
            f"cannot run {tool} {invocation.describe()} in {directory}: {exc}"
        ) from exc
    return ToolResult(
        success=proc.returncode == 0,
        output=proc.stdout or "",
        returncode=proc.returncode,
    )


__all__ = [
    "DEFAULT_TOOL",
    "SHORT_MODIFIER",
    "RACE_MODIFIER",
    "ToolAction",
    "ToolInvocation",
    "ToolResult",
    "run_tests_invocation",
    "build_invocation",
    "trim_trailing_newline",
    "run_tool",
]
