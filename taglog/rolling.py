"""An appender that writes to a file and rolls it over by size or on demand."""

from __future__ import annotations

import os
from typing import TextIO

from .appender import BaseLogAppender
from .loglevel import LogLevel
from .record import LogRecord

__all__ = ["RollingFileAppender"]


class RollingFileAppender(BaseLogAppender):
    """Logs to ``prefix.suffix`` and keeps older files as ``prefix.N.suffix``.

    ``max_files`` is at least 1 and ``max_file_size`` at least 1024 bytes; with
    a single file the size is ignored. A file grows past the maximum by the
    message that pushes it over before it is rolled.
    """

    def __init__(
        self, prefix: str, suffix: str, max_file_size: int, max_files: int
    ) -> None:
        super().__init__(level=LogLevel.DEFAULT)
        self.prefix = prefix
        self.suffix = suffix
        self.max_file_size = max(max_file_size, 1024)
        self.max_files = max(max_files, 1)
        self._first_time = True
        self._file: TextIO | None = None

    def current_file_name(self) -> str:
        """Return the name of the file being written, ``prefix.suffix``."""
        return f"{self.prefix}.{self.suffix}"

    def _numbered_name(self, number: int) -> str:
        return f"{self.prefix}.{number}.{self.suffix}"

    def _open(self) -> None:
        with self._lock:
            if self._file is None:
                self._file = open(
                    self.current_file_name(), "a", encoding="utf-8", newline=""
                )

    def close(self) -> None:
        """Flush and close the current file."""
        with self._lock:
            if self._file is not None:
                try:
                    self._file.close()
                finally:
                    self._file = None

    def _needs_roll(self) -> bool:
        name = self.current_file_name()
        if self.max_files == 1:
            try:
                os.stat(name)
            except FileNotFoundError:
                return True
            except OSError:
                return False
            return False

        if self._first_time:
            return True

        try:
            size = os.stat(name).st_size
        except OSError:
            return True
        return size >= self.max_file_size

    def roll(self) -> None:
        """Shift every file up one number, dropping the oldest beyond max_files."""
        with self._lock:
            self.close()
            self._first_time = False
            for number in range(self.max_files - 2, -1, -1):
                name = (
                    self.current_file_name()
                    if number == 0
                    else self._numbered_name(number)
                )
                try:
                    os.stat(name)
                except FileNotFoundError:
                    continue
                os.replace(name, self._numbered_name(number + 1))

    def log(self, record: LogRecord) -> None:
        """Write the record to the current file, rolling first if needed."""
        if not self.check_level(record.level):
            return
        with self._lock:
            if self._needs_roll():
                self.roll()
                self._open()
            if self._file is None:
                self._open()
            self._emit(self.format(record))

    def _emit(self, text: str) -> None:
        if self._file is not None:
            self._file.write(text)
            self._file.write("\n")
            self._file.flush()