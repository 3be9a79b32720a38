"""Log levels used to filter records."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["LogLevel", "level_from_string"]


class LogLevel(IntEnum):
    """Importance of a logging request; higher values are more important."""

    DEFAULT = 0
    """Loggers at this level defer to the default logger's level."""
    VERBOSE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5

    def __str__(self) -> str:
        if self >= LogLevel.ERROR:
            return "ERROR"
        if self >= LogLevel.WARN:
            return "WARN"
        if self >= LogLevel.INFO:
            return "INFO"
        if self >= LogLevel.DEBUG:
            return "DEBUG"
        return "VERBOSE"


_NAMES = {
    "error": LogLevel.ERROR,
    "warning": LogLevel.WARN,
    "warn": LogLevel.WARN,
    "info": LogLevel.INFO,
    "informative": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
    "verbose": LogLevel.VERBOSE,
}


def level_from_string(text: str) -> LogLevel:
    """Convert a level name in any case to a LogLevel.

    Unknown names give LogLevel.DEFAULT.
    """
    return _NAMES.get(text.lower(), LogLevel.DEFAULT)