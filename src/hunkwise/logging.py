"""Logging setup for hunkwise.

Library modules log under the ``hunkwise`` namespace and never configure
handlers themselves. Applications either let records propagate to the root
logger (as the CLI does) or attach a dedicated log file with
:func:`configure_file_logger`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from hunkwise.config import LogLevel

LOGGER_NAME = "hunkwise"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_file_logger(
    log_path: Path | str,
    *,
    log_level: LogLevel | str = LogLevel.INFO,
    max_bytes: int | None = None,
) -> logging.Logger:
    """Attach a file handler for ``log_path`` to the ``hunkwise`` logger.

    Repeated calls for the same path reuse the existing handler. An existing
    log file larger than ``max_bytes`` is truncated before it is opened.
    """

    logger = logging.getLogger(LOGGER_NAME)
    level_value = _to_logging_level(log_level)
    logger.setLevel(level_value)
    logger.propagate = False

    path = Path(log_path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == Path(os.path.abspath(path)):
            handler.setLevel(level_value)
            return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    if max_bytes is not None and path.exists() and path.stat().st_size > max_bytes:
        path.write_text("", encoding="utf-8")

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level_value)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def _to_logging_level(value: LogLevel | str) -> int:
    mapping = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
    }
    if isinstance(value, LogLevel):
        return mapping[value]
    if isinstance(value, str):
        try:
            return mapping[LogLevel(value)]
        except ValueError:
            return logging.WARNING
    return logging.WARNING


__all__ = [
    "LOGGER_NAME",
    "LOG_FORMAT",
    "configure_file_logger",
    "_to_logging_level",
]
