"""Formatting functions that turn a log record's fields into a line of text."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from datetime import datetime
from enum import Enum

from .loglevel import LogLevel

__all__ = [
    "LogFormat",
    "LogFormatter",
    "format_from_string",
    "get_formatter",
    "full_format",
    "simple_format",
    "minimal_format",
    "minimal_tagged_format",
    "set_default_formatter",
    "default_formatter",
]

LogFormatter = Callable[
    [LogLevel, "Sequence[str] | None", str, datetime, datetime], str
]

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class LogFormat(str, Enum):
    """Names of the built-in formatters."""

    MINIMAL = "minimal"
    MINIMALTAGGED = "minimaltagged"
    SIMPLE = "simple"
    FULL = "full"


def format_from_string(format_name: str) -> LogFormat:
    """Convert a format name in any case to a LogFormat; unknown names give SIMPLE."""
    try:
        return LogFormat(format_name.lower())
    except ValueError:
        return LogFormat.SIMPLE


def _stamp(t: datetime) -> str:
    return f"{_MONTHS[t.month - 1]} {t.day:2d} {t:%H:%M:%S}"


def _stamp_milli(t: datetime) -> str:
    return f"{_stamp(t)}.{t.microsecond // 1000:03d}"


def _tag_list(tags: Sequence[str]) -> str:
    return "[" + " ".join(str(tag) for tag in tags) + "]"


def full_format(
    level: LogLevel,
    tags: Sequence[str] | None,
    message: str,
    time: datetime,
    original: datetime,
) -> str:
    """Timestamp to the millisecond, level, tags and message; replays are marked."""
    if original != time:
        message = f"[replayed from {_stamp_milli(original)}] {message}"
    if tags:
        return f"[{_stamp_milli(time)}] [{level}] {_tag_list(tags)} {message}"
    return f"[{_stamp_milli(time)}] [{level}] {message}"


def simple_format(
    level: LogLevel,
    tags: Sequence[str] | None,
    message: str,
    time: datetime,
    original: datetime,
) -> str:
    """Timestamp, level and message."""
    return f"[{_stamp(time)}] [{level}] {message}"


def minimal_format(
    level: LogLevel,
    tags: Sequence[str] | None,
    message: str,
    time: datetime,
    original: datetime,
) -> str:
    """The message alone."""
    return message


def minimal_tagged_format(
    level: LogLevel,
    tags: Sequence[str] | None,
    message: str,
    time: datetime,
    original: datetime,
) -> str:
    """Level, tags and message."""
    if tags:
        return f"[{level}] {_tag_list(tags)} {message}"
    return f"[{level}] {message}"


_FORMATTERS: dict[LogFormat, LogFormatter] = {
    LogFormat.FULL: full_format,
    LogFormat.SIMPLE: simple_format,
    LogFormat.MINIMALTAGGED: minimal_tagged_format,
    LogFormat.MINIMAL: minimal_format,
}


def get_formatter(format_name: LogFormat | str) -> LogFormatter:
    """Return the function for a named format; unknown names give simple_format."""
    return _FORMATTERS.get(format_name, simple_format)


_lock = threading.Lock()
_default: LogFormatter = full_format


def set_default_formatter(formatter: LogFormatter) -> None:
    """Set the formatter used by appenders that have none of their own."""
    global _default
    with _lock:
        _default = formatter


def default_formatter() -> LogFormatter:
    """Return the formatter used by appenders that have none of their own."""
    with _lock:
        return _default