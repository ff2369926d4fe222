"""Command-line front door for alltest.

Parses flags, resolves skip targets relative to the working directory, runs
the recursive evaluator, and maps the collected failures to an exit status.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import (
    RunConfiguration,
    load_default_skip,
    load_source_naming,
    load_tool_name,
    parse_skip_list,
    resolve_skip_targets,
)
from .errors import ConfigurationError, InfrastructureError
from .evaluator import DirectoryEvaluator
from .reporting import RunLog, configure_logging
from .toolchain import run_tool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alltest",
        description=(
            "Run tests in every subdirectory with test sources and build every "
            "other directory with sources. Exits non-zero if any run fails."
        ),
    )
    parser.add_argument(
        "--skip",
        default=load_default_skip(),
        help="Comma-separated list of directories to skip (default: %(default)s).",
    )
    parser.add_argument(
        "--buildOnly",
        dest="build_only",
        action="store_true",
        help='Do "build" instead of "test" everywhere.',
    )
    parser.add_argument("--short", action="store_true", help='Run "test" with the "-short" flag.')
    parser.add_argument("--race", action="store_true", help='Run "test" with the "-race" flag.')
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show tool output and a success line for passing directories.",
    )
    parser.add_argument("-c", "--color", action="store_true", help="Colorize log output.")
    parser.add_argument("--tool", default=load_tool_name(), help="Build/test executable (default: %(default)s).")
    return parser


def _report_summary(failed_dirs: list[str], logger: RunLog) -> None:
    sys.stdout.write("\n\n")
    sys.stdout.flush()
    if failed_dirs:
        logger.error("at least one test or build failed. Failed directories:")
        for rel in failed_dirs:
            logger.error("  %s", rel)
    else:
        print("all tests/builds succeeded")


def main(default_root: Path | None = None) -> None:
    """Parse CLI arguments and run the recursive test/build pass.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is the traversal root. Raises ``SystemExit(1)`` on any failed
    directory, configuration error, or infrastructure error.
    """
    args = build_parser().parse_args()
    root = (default_root if default_root is not None else Path.cwd()).resolve()

    try:
        skip_targets = resolve_skip_targets(parse_skip_list(args.skip), root)
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc

    config = RunConfiguration(
        skip_targets=skip_targets,
        build_only=args.build_only,
        short=args.short,
        race=args.race,
        verbose=args.verbose,
        color=args.color,
        tool=args.tool,
        naming=load_source_naming(),
    )
    logger = configure_logging(verbose=config.verbose, color=config.color)

    evaluator = DirectoryEvaluator(config, run_tool=run_tool, log=logger)
    try:
        failed_dirs = evaluator.evaluate(root)
    except InfrastructureError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    _report_summary(failed_dirs, logger)
    if failed_dirs:
        raise SystemExit(1)
