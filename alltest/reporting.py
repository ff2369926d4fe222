"""Severity-tiered run logging and its ANSI color palette.

The evaluator only needs ``debug``/``info``/``error``; any ``logging.Logger``
satisfies that, and tests can pass a recorder instead.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Protocol, TextIO

LOGGER_NAME = "alltest"
LOG_FORMAT = "%(asctime)s alltest: %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class RunLog(Protocol):
    def debug(self, msg: str, *args: object) -> None: ...

    def info(self, msg: str, *args: object) -> None: ...

    def error(self, msg: str, *args: object) -> None: ...


@dataclass(frozen=True)
class LogPalette:
    """ANSI SGR prefixes applied per log level when color is enabled."""

    debug: str
    info: str
    warning: str
    error: str
    reset: str

    def for_level(self, levelno: int) -> str:
        if levelno >= logging.ERROR:
            return self.error
        if levelno >= logging.WARNING:
            return self.warning
        if levelno >= logging.INFO:
            return self.info
        return self.debug


DEFAULT_PALETTE = LogPalette(
    debug="\033[2;38;5;250m",
    info="\033[38;5;42m",
    warning="\033[38;5;214m",
    error="\033[1;38;5;203m",
    reset="\033[0m",
)


class ColorFormatter(logging.Formatter):
    """Formatter that wraps every formatted record in its level color."""

    def __init__(self, fmt: str, datefmt: str | None = None, palette: LogPalette = DEFAULT_PALETTE) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.palette = palette

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        return f"{self.palette.for_level(record.levelno)}{text}{self.palette.reset}"


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(verbose: bool, color: bool, stream: TextIO | None = None) -> logging.Logger:
    """Install a single stream handler on the ``alltest`` logger.

    Debug lines are shown only when ``verbose``. Re-configuring replaces the
    previous handler, so repeated CLI invocations in one process do not
    duplicate output.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    if color:
        handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


__all__ = [
    "LOGGER_NAME",
    "RunLog",
    "LogPalette",
    "DEFAULT_PALETTE",
    "ColorFormatter",
    "get_logger",
    "configure_logging",
]
