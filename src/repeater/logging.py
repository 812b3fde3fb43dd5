"""Logging setup for retry diagnostics."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "repeater"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class RetryFormatter(py_logging.Formatter):
    """Appends the ``attempt`` and ``delay`` fields the executor attaches to its records."""

    def format(self, record: py_logging.LogRecord) -> str:
        message = super().format(record)
        attempt = getattr(record, "attempt", None)
        if attempt is None:
            return message
        delay = getattr(record, "delay", None)
        if delay is None:
            return f"{message} [attempt={attempt}]"
        return f"{message} [attempt={attempt} delay={delay:.3f}s]"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return LOG_LEVELS.get(level.strip().upper(), py_logging.INFO)


def configure_logging(
    level: str | int = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Route ``repeater`` records to ``stream`` (stderr by default) and optionally a file.

    At DEBUG every failed attempt is shown with its scheduled delay; at WARNING
    only exhausted budgets and rejected settings appear. Calling again replaces
    the handlers installed by the previous call.
    """
    resolved = resolve_level(level)
    formatter = RetryFormatter(_FORMAT)

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            logger.warning("Cannot open retry log file %s, logging to stream only", log_path)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
