"""Tag based logging.

Named loggers hold their own levels; tags set levels across concepts,
independently of logger names. Every logger shares the global appenders.
A logger may keep a buffer of records that did not pass its level; the
buffer is replayed whenever the logger's level or tag levels change, with
each replayed record keeping its original time.

Records are handed to a background worker, so ``wait_for_incoming`` must be
called before inspecting appenders in tests or at shutdown.
"""

from __future__ import annotations

import queue
import threading
from collections import deque
from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Any

from .appender import LogAppender, stderr_appender
from .loglevel import LogLevel
from .record import LogRecord

__all__ = [
    "LoggingError",
    "Logger",
    "pause_logging",
    "restart_logging",
    "stop_logging",
    "wait_for_incoming",
    "capture_logging_errors",
    "default_logger",
    "get_logger",
    "enable_verbose_logging",
    "disable_verbose_logging",
    "set_default_log_level",
    "set_default_tag_log_level",
    "set_default_buffer_length",
    "add_appender",
    "clear_appenders",
    "clear_loggers",
    "check_level",
    "error",
    "errorf",
    "warn",
    "warnf",
    "info",
    "infof",
    "debug",
    "debugf",
    "verbosef",
]

_POLL_INTERVAL = 0.05


class LoggingError(Exception):
    """A failure while appending a record, reported to the captured error queue."""

    def __init__(
        self,
        message: str,
        appender: LogAppender | None = None,
        record: LogRecord | None = None,
    ) -> None:
        super().__init__(message)
        self.appender = appender
        self.record = record


class _State(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


_lock = threading.RLock()
_appenders: list[LogAppender] = []
_incoming: queue.Queue[LogRecord] = queue.Queue()
_errors: queue.Queue[Any] | None = None
_verbose = threading.Event()

_state_cond = threading.Condition()
_state = _State.RUNNING


def _sprint(args: Sequence[Any]) -> str:
    """Join values, adding a space between two neighbours that are not strings."""
    if not args:
        return ""
    pieces = [str(args[0])]
    for previous, current in zip(args, args[1:]):
        if not isinstance(previous, str) and not isinstance(current, str):
            pieces.append(" ")
        pieces.append(str(current))
    return "".join(pieces)


class Logger:
    """A named logger with its own level, tag levels and replay buffer."""

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.DEFAULT,
        buffer_length: int = 0,
    ) -> None:
        self.name = name
        self._level = level
        self._tag_levels: dict[str, LogLevel] = {}
        self._buffer: deque[LogRecord] | None = None
        self._set_buffer_length(buffer_length)

    def __repr__(self) -> str:
        return f"Logger({self.name!r}, level={self._level.name})"

    # configuration -------------------------------------------------------

    def set_log_level(self, level: LogLevel) -> None:
        """Set the level for this logger and replay buffered records.

        Setting the default logger's level replays every logger's buffer.
        """
        with _lock:
            self._level = level
            self._flush()

    def set_tag_level(self, tag: str, level: LogLevel) -> None:
        """Let records carrying ``tag`` through at ``level`` and above."""
        with _lock:
            self._tag_levels[tag] = level
            self._flush()

    def set_buffer_length(self, length: int) -> None:
        """Replace the buffer with an empty one of ``length``; 0 removes it."""
        with _lock:
            self._set_buffer_length(length)

    @property
    def _buffer_length(self) -> int:
        if self._buffer is None:
            return 0
        return self._buffer.maxlen or 0

    def _set_buffer_length(self, length: int) -> None:
        if length <= 0:
            self._buffer = None
        elif length != self._buffer_length:
            self._buffer = deque(maxlen=length)

    def _flush(self) -> None:
        if self is _default_logger:
            for logger in [*_loggers.values(), _default_logger]:
                logger._flush_buffer()
        else:
            self._flush_buffer()

    def _flush_buffer(self) -> None:
        if self._buffer is None:
            return
        now = datetime.now()
        old = self._buffer
        self._buffer = deque(maxlen=old.maxlen)
        for record in old:
            record.time = now
            _incoming.put(record)

    # level checks --------------------------------------------------------

    def check_level(self, level: LogLevel, tags: Sequence[str] | None = None) -> bool:
        """Return True if a record at ``level`` with ``tags`` would be appended."""
        with _lock:
            return self._passes(level, tags)

    def _passes(self, level: LogLevel, tags: Sequence[str] | None) -> bool:
        default = _default_logger
        if (
            tags is not None
            and (self._tag_levels or default._tag_levels)
            and self._tag_passes(level, tags)
        ):
            return True
        if self._level != LogLevel.DEFAULT:
            return self._level <= level
        return default._level <= level

    def _tag_passes(self, level: LogLevel, tags: Sequence[str]) -> bool:
        sources = [self._tag_levels]
        if self is not _default_logger:
            sources.append(_default_logger._tag_levels)
        for tag in tags:
            for tag_levels in sources:
                tag_level = tag_levels.get(tag)
                if tag_level is not None and tag_level <= level:
                    return True
        return False

    # logging -------------------------------------------------------------

    def _submit(
        self, level: LogLevel, tags: Sequence[str] | None, fmt: str, args: Sequence[Any]
    ) -> None:
        if level == LogLevel.VERBOSE and not _verbose.is_set():
            return
        message = fmt % tuple(args) if fmt else _sprint(args)
        _incoming.put(LogRecord(level=level, message=message, tags=tags, logger=self))

    def log(self, level: LogLevel, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log the arguments, joined into a string, at ``level``."""
        self._submit(level, tags, "", args)

    def error(self, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log an ERROR message built from the arguments."""
        self._submit(LogLevel.ERROR, tags, "", args)

    def errorf(self, fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log an ERROR message formatted with ``fmt % args``."""
        self._submit(LogLevel.ERROR, tags, fmt, args)

    def warn(self, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log a WARN message built from the arguments."""
        self._submit(LogLevel.WARN, tags, "", args)

    def warnf(self, fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log a WARN message formatted with ``fmt % args``."""
        self._submit(LogLevel.WARN, tags, fmt, args)

    def info(self, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log an INFO message built from the arguments."""
        self._submit(LogLevel.INFO, tags, "", args)

    def infof(self, fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log an INFO message formatted with ``fmt % args``."""
        self._submit(LogLevel.INFO, tags, fmt, args)

    def debug(self, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log a DEBUG message built from the arguments."""
        self._submit(LogLevel.DEBUG, tags, "", args)

    def debugf(self, fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log a DEBUG message formatted with ``fmt % args``."""
        self._submit(LogLevel.DEBUG, tags, fmt, args)

    def verbosef(self, fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
        """Log a VERBOSE message; ignored unless verbose logging is enabled.

        Verbose messages are never buffered.
        """
        self._submit(LogLevel.VERBOSE, tags, fmt, args)


_default_logger = Logger("_default", LogLevel.INFO)
_loggers: dict[str, Logger] = {}


# background processing ---------------------------------------------------


def _report(err: LoggingError) -> None:
    target = _errors
    if target is None:
        return
    try:
        target.put_nowait(err)
    except queue.Full:
        pass


def _log_to_appenders(record: LogRecord) -> None:
    for appender in _appenders:
        try:
            appender.log(record)
        except Exception as exc:
            err = LoggingError(str(exc), appender, record)
            err.__cause__ = exc
            _report(err)


def _process_log_record(record: LogRecord) -> None:
    with _lock:
        logger: Logger = record.logger or _default_logger
        if logger._passes(record.level, record.tags):
            _log_to_appenders(record)
        elif logger._buffer is not None and record.level > LogLevel.VERBOSE:
            logger._buffer.append(record)


def _process_incoming() -> None:
    while True:
        try:
            record: LogRecord | None = _incoming.get(timeout=_POLL_INTERVAL)
        except queue.Empty:
            record = None
        with _state_cond:
            while _state is _State.PAUSED:
                _state_cond.wait()
            if _state is _State.STOPPED:
                return
            if record is not None:
                try:
                    _process_log_record(record)
                finally:
                    _incoming.task_done()


def _set_state(state: _State) -> None:
    global _state
    with _state_cond:
        if _state is _State.STOPPED:
            return
        _state = state
        _state_cond.notify_all()


def pause_logging() -> None:
    """Stop processing records until restart_logging is called."""
    _set_state(_State.PAUSED)


def restart_logging() -> None:
    """Resume processing records after pause_logging."""
    _set_state(_State.RUNNING)


def stop_logging() -> None:
    """Stop processing for good and wait for the worker to finish."""
    global _state
    with _state_cond:
        if _state is _State.STOPPED:
            raise LoggingError("logging has already been stopped")
        _state = _State.STOPPED
        _state_cond.notify_all()
    _worker.join()


def wait_for_incoming() -> None:
    """Block until every record handed to the worker has been processed."""
    _incoming.join()


def capture_logging_errors(errors: queue.Queue[Any] | None) -> None:
    """Send appender failures to ``errors`` without blocking; None stops it."""
    global _errors
    with _lock:
        _errors = errors


# configuration -----------------------------------------------------------


def default_logger() -> Logger:
    """Return the logger used when no named logger is needed."""
    return _default_logger


def get_logger(name: str) -> Logger:
    """Return the named logger, creating it with default settings if needed."""
    with _lock:
        logger = _loggers.get(name)
        if logger is None:
            logger = Logger(name, LogLevel.DEFAULT, _default_logger._buffer_length)
            _loggers[name] = logger
        return logger


def enable_verbose_logging() -> None:
    """Allow VERBOSE messages, which are ignored by default."""
    _verbose.set()


def disable_verbose_logging() -> None:
    """Ignore VERBOSE messages again."""
    _verbose.clear()


def set_default_log_level(level: LogLevel) -> None:
    """Set the default logger's level and replay every buffer."""
    _default_logger.set_log_level(level)


def set_default_tag_log_level(tag: str, level: LogLevel) -> None:
    """Set the default logger's level for ``tag`` and replay every buffer."""
    _default_logger.set_tag_level(tag, level)


def set_default_buffer_length(length: int) -> None:
    """Set the default logger's buffer length, also for loggers without a buffer."""
    with _lock:
        _default_logger._set_buffer_length(length)
        for logger in _loggers.values():
            if logger._buffer is None:
                logger._set_buffer_length(length)


def add_appender(appender: LogAppender) -> None:
    """Add an appender shared by all loggers."""
    with _lock:
        _appenders.append(appender)


def clear_appenders() -> None:
    """Close and remove every appender, pausing logging while doing so."""
    pause_logging()
    try:
        with _lock:
            for appender in _appenders:
                try:
                    appender.close()
                except Exception as exc:
                    err = LoggingError(str(exc), appender)
                    err.__cause__ = exc
                    _report(err)
            _appenders.clear()
    finally:
        restart_logging()


def clear_loggers() -> None:
    """Forget every named logger, pausing logging while doing so."""
    pause_logging()
    try:
        with _lock:
            _loggers.clear()
    finally:
        restart_logging()


def check_level(level: LogLevel, tags: Sequence[str] | None = None) -> bool:
    """Check ``level`` and ``tags`` against the default logger."""
    return _default_logger.check_level(level, tags)


# default logger shortcuts -------------------------------------------------


def error(*args: Any, tags: Sequence[str] | None = None) -> None:
    """Log an ERROR message on the default logger."""
    _default_logger.error(*args, tags=tags)


def errorf(fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a formatted ERROR message on the default logger."""
    _default_logger.errorf(fmt, *args, tags=tags)


def warn(*args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a WARN message on the default logger."""
    _default_logger.warn(*args, tags=tags)


def warnf(fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a formatted WARN message on the default logger."""
    _default_logger.warnf(fmt, *args, tags=tags)


def info(*args: Any, tags: Sequence[str] | None = None) -> None:
    """Log an INFO message on the default logger."""
    _default_logger.info(*args, tags=tags)


def infof(fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a formatted INFO message on the default logger."""
    _default_logger.infof(fmt, *args, tags=tags)


def debug(*args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a DEBUG message on the default logger."""
    _default_logger.debug(*args, tags=tags)


def debugf(fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a formatted DEBUG message on the default logger."""
    _default_logger.debugf(fmt, *args, tags=tags)


def verbosef(fmt: str, *args: Any, tags: Sequence[str] | None = None) -> None:
    """Log a formatted VERBOSE message on the default logger."""
    _default_logger.verbosef(fmt, *args, tags=tags)


add_appender(stderr_appender())

_worker = threading.Thread(target=_process_incoming, name="taglog-worker", daemon=True)
_worker.start()