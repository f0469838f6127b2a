"""Console log formatting and the status symbols used in messages."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TextIO

SUCCESS = "\u2714"
FAILURE = "\u2717"
ATTENTION = "\u26A0"
SKIPPED = "-"

LOGGER_NAME = "tfplansummary"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_CYAN = "36"
_YELLOW = "33"
_RED = "31"

_LEVEL_NAMES = {"CRITICAL": "FATAL"}


def colors_enabled() -> bool:
    """Return True when standard output is a colour-capable terminal."""
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _colorize(text: str, code: str) -> str:
    if not colors_enabled():
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


class TextFormat(logging.Formatter):
    """Plain text log format: an optional coloured level, timestamp and message."""

    def __init__(
        self,
        show_info_level: bool = False,
        show_timestamp: bool = False,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        super().__init__()
        self.show_info_level = show_info_level
        self.show_timestamp = show_timestamp
        self.timestamp_format = timestamp_format

    def _level_prefix(self, record: logging.LogRecord) -> str:
        level = record.levelname.upper()
        level = _LEVEL_NAMES.get(level, level)
        if level == "INFO":
            if not self.show_info_level:
                return ""
            return _colorize(level, _CYAN) + ": "
        if level == "WARNING":
            return _colorize(level, _YELLOW) + ": "
        if level == "DEBUG":
            return _colorize(level, _CYAN) + ": "
        return _colorize(level, _RED) + ": "

    def format(self, record: logging.LogRecord) -> str:
        parts = [self._level_prefix(record)]
        if self.show_timestamp:
            stamp = datetime.fromtimestamp(record.created).strftime(self.timestamp_format)
            parts.append(f"{stamp} - ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        parts.append(message)
        if not message.endswith("\n"):
            parts.append("\n")
        return "".join(parts)


def configure_logging(stream: TextIO | None = None, debug: bool = False) -> logging.Logger:
    """Route the package logger to ``stream`` (standard output by default)."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.terminator = ""
    handler.setFormatter(TextFormat())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return logger