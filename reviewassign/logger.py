"""Logger construction for the review-assignment services."""

from __future__ import annotations

import json
import logging
import sys

_LOGGER_NAME = "reviewassign"

_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

_LEVEL_COLORS = {
    logging.DEBUG: "\x1b[35m",
    logging.INFO: "\x1b[34m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
}

_RESET = "\x1b[0m"


def _extra_fields(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class _ConsoleFormatter(logging.Formatter):
    """Tab-separated human-readable lines, optionally with coloured levels."""

    def __init__(self, colored: bool) -> None:
        super().__init__()
        self._colored = colored

    def format(self, record: logging.LogRecord) -> str:
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        if self._colored:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"
        parts = [
            self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            level,
            f"{record.module}:{record.lineno}",
            record.getMessage(),
        ]
        extras = _extra_fields(record)
        if extras:
            parts.append(json.dumps(extras, default=str))
        line = "\t".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class _JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname).lower(),
            "ts": record.created,
            "caller": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        entry.update(_extra_fields(record))
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def new_logger(level: str) -> logging.Logger:
    """Build an independent logger.

    ``"dev"`` logs everything from DEBUG with coloured levels, ``"prod"`` logs
    from INFO as JSON lines, and anything else uses the development setup
    without colours.
    """
    if level == "prod":
        threshold = logging.INFO
        formatter: logging.Formatter = _JsonFormatter()
    else:
        threshold = logging.DEBUG
        formatter = _ConsoleFormatter(colored=level == "dev")

    logger = logging.Logger(_LOGGER_NAME, threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger