"""Appenders push formatted log records to a destination."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from typing import TextIO

from .formatter import LogFormatter, default_formatter
from .loglevel import LogLevel
from .record import LogRecord

__all__ = [
    "LogAppender",
    "BaseLogAppender",
    "NullAppender",
    "ErrorAppender",
    "ConsoleAppender",
    "stderr_appender",
    "stdout_appender",
    "MemoryAppender",
    "WriterAppender",
]


class LogAppender(ABC):
    """A destination for log records."""

    @abstractmethod
    def log(self, record: LogRecord) -> None:
        """Append the record, raising on failure."""

    @abstractmethod
    def set_level(self, level: LogLevel) -> None:
        """Remember the level below which records are dropped."""

    @abstractmethod
    def set_formatter(self, formatter: LogFormatter | None) -> None:
        """Remember the function used to turn records into text."""

    def close(self) -> None:
        """Release any resources held; the default holds none."""


class BaseLogAppender(LogAppender):
    """Level and formatter handling shared by the concrete appenders."""

    def __init__(
        self,
        level: LogLevel = LogLevel.DEFAULT,
        formatter: LogFormatter | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._level = level
        self._formatter = formatter

    def set_level(self, level: LogLevel) -> None:
        with self._lock:
            self._level = level

    def check_level(self, level: LogLevel) -> bool:
        """Return True if a record at ``level`` passes this appender."""
        with self._lock:
            return self._level <= level

    def set_formatter(self, formatter: LogFormatter | None) -> None:
        with self._lock:
            self._formatter = formatter

    def format(self, record: LogRecord) -> str:
        """Format the record with this appender's formatter or the default one."""
        with self._lock:
            formatter = self._formatter or default_formatter()
        original = record.original if record.original is not None else record.time
        return formatter(record.level, record.tags, record.message, record.time, original)

    def log(self, record: LogRecord) -> None:
        with self._lock:
            if self._level > record.level:
                return
            self._emit(self.format(record))

    def close(self) -> None:
        """Nothing to release by default."""

    @abstractmethod
    def _emit(self, text: str) -> None:
        """Write one formatted line to the destination."""


class NullAppender(BaseLogAppender):
    """Counts the records it receives and discards them, ignoring its level."""

    def __init__(self) -> None:
        super().__init__()
        self._count = 0
        self._count_lock = threading.Lock()

    def log(self, record: LogRecord) -> None:
        with self._count_lock:
            self._count += 1

    def count(self) -> int:
        """Return how many records have been received."""
        with self._count_lock:
            return self._count

    def _emit(self, text: str) -> None:
        with self._count_lock:
            self._count += 1


class ErrorAppender(NullAppender):
    """Counts each record and then fails with an error naming its message."""

    def log(self, record: LogRecord) -> None:
        super().log(record)
        raise RuntimeError(f"error: {record.message}")


class ConsoleAppender(BaseLogAppender):
    """Writes records to standard error, or standard output if asked."""

    def __init__(self, use_stdout: bool = False) -> None:
        super().__init__()
        self.use_stdout = use_stdout

    def log(self, record: LogRecord) -> None:
        super().log(record)

    def _emit(self, text: str) -> None:
        stream = sys.stdout if self.use_stdout else sys.stderr
        print(text, file=stream)


def stderr_appender() -> ConsoleAppender:
    """Create a console appender writing to standard error."""
    return ConsoleAppender(use_stdout=False)


def stdout_appender() -> ConsoleAppender:
    """Create a console appender writing to standard output."""
    return ConsoleAppender(use_stdout=True)


class MemoryAppender(BaseLogAppender):
    """Keeps every formatted message in a list; useful for tests."""

    def __init__(self) -> None:
        super().__init__()
        self._messages: list[str] = []

    def log(self, record: LogRecord) -> None:
        super().log(record)

    def logged_messages(self) -> list[str]:
        """Return the messages logged so far, oldest first."""
        with self._lock:
            return list(self._messages)

    def _emit(self, text: str) -> None:
        self._messages.append(text)


class WriterAppender(BaseLogAppender):
    """Writes each formatted record, followed by a newline, to a text stream."""

    def __init__(self, writer: TextIO | None) -> None:
        super().__init__()
        self._writer = writer

    def log(self, record: LogRecord) -> None:
        super().log(record)

    def _emit(self, text: str) -> None:
        if self._writer is not None:
            self._writer.write(text)
            self._writer.write("\n")