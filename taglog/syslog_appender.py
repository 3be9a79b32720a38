"""An appender that sends records to the system log service."""

from __future__ import annotations

from .appender import BaseLogAppender
from .loglevel import LogLevel
from .record import LogRecord

try:
    import syslog as _syslog
except ImportError:  # no syslog service on this platform
    _syslog = None

__all__ = ["SysLogAppender"]


class SysLogAppender(BaseLogAppender):
    """Sends each record to syslog with a priority matching its level."""

    def __init__(self) -> None:
        if _syslog is None:
            raise OSError("syslog is not supported on this platform")
        super().__init__(level=LogLevel.DEFAULT)
        self._opened = False

    def _priority(self, level: LogLevel) -> int:
        assert _syslog is not None
        return {
            LogLevel.DEBUG: _syslog.LOG_DEBUG,
            LogLevel.INFO: _syslog.LOG_INFO,
            LogLevel.WARN: _syslog.LOG_WARNING,
            LogLevel.ERROR: _syslog.LOG_ERR,
        }.get(level, _syslog.LOG_DEBUG)

    def log(self, record: LogRecord) -> None:
        if not self.check_level(record.level):
            return
        assert _syslog is not None
        with self._lock:
            if not self._opened:
                _syslog.openlog()
                self._opened = True
            _syslog.syslog(self._priority(record.level), self.format(record))

    def close(self) -> None:
        """Close the connection to syslog if one was opened."""
        with self._lock:
            if self._opened and _syslog is not None:
                _syslog.closelog()
                self._opened = False

    def _emit(self, text: str) -> None:
        assert _syslog is not None
        _syslog.syslog(_syslog.LOG_DEBUG, text)