"""
Logging setup for the SDK.

All modules log through ``logging.getLogger(__name__)``; this module only
decides the level and output of the ``gettranslated`` package logger.
"""

from __future__ import annotations

import logging
from enum import Enum

PACKAGE_LOGGER = "gettranslated"
LOG_FORMAT = "[GetTranslated] %(message)s"

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")


class LogLevel(str, Enum):
    """Log levels accepted by ``initialize``."""
    
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    VERBOSE = "verbose"
    
    @property
    def logging_level(self) -> int:
        return _LEVELS[self]


_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.VERBOSE: VERBOSE,
}


def parse_log_level(value: str | LogLevel) -> LogLevel:
    """Accept a LogLevel or its name ("warning" is an alias of "warn")."""
    if isinstance(value, LogLevel):
        return value
    name = value.strip().lower()
    if name == "warning":
        name = "warn"
    try:
        return LogLevel(name)
    except ValueError:
        raise ValueError(f"Unknown log level: {value}") from None


def configure_logging(level: str | LogLevel = LogLevel.WARN) -> logging.Logger:
    """Set the package logger level and install the console handler once."""
    log_level = parse_log_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level.logging_level)
    
    if not any(getattr(h, "_gettranslated", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._gettranslated = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    
    return logger
