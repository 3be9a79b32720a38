import io
from datetime import datetime

import pytest

from taglog.appender import (
    ConsoleAppender,
    ErrorAppender,
    MemoryAppender,
    NullAppender,
    WriterAppender,
    stderr_appender,
    stdout_appender,
)
from taglog.formatter import (
    LogFormat,
    default_formatter,
    full_format,
    get_formatter,
    set_default_formatter,
)
from taglog.loglevel import LogLevel
from taglog.record import LogRecord


def rec(level, message, tags=None):
    return LogRecord(level=level, message=message, tags=tags)


def minimal_memory():
    memory = MemoryAppender()
    memory.set_formatter(get_formatter(LogFormat.MINIMAL))
    return memory


def test_appender_level():
    memory = minimal_memory()
    memory.set_level(LogLevel.WARN)
    second = minimal_memory()
    second.set_level(LogLevel.DEBUG)

    for app in (memory, second):
        app.log(rec(LogLevel.ERROR, "error"))
        app.log(rec(LogLevel.INFO, "info"))

    assert memory.logged_messages() == ["error"]
    assert second.logged_messages() == ["error", "info"]


def test_null_appender_counts_everything():
    app = NullAppender()
    app.set_level(LogLevel.ERROR)
    app.log(rec(LogLevel.INFO, "one"))
    app.log(rec(LogLevel.DEBUG, "two"))
    assert app.count() == 2


def test_appender_check_level():
    app = stderr_appender()
    app.set_level(LogLevel.INFO)
    assert app.check_level(LogLevel.ERROR) is True
    assert app.check_level(LogLevel.INFO) is True
    assert app.check_level(LogLevel.DEBUG) is False


def test_default_level_lets_everything_through():
    memory = minimal_memory()
    memory.log(rec(LogLevel.VERBOSE, "v"))
    assert memory.logged_messages() == ["v"]


def test_stderr_appender(capsys):
    app = stderr_appender()
    app.set_formatter(get_formatter(LogFormat.MINIMAL))
    app.set_level(LogLevel.INFO)
    app.log(rec(LogLevel.INFO, "one"))
    app.log(rec(LogLevel.DEBUG, "two"))
    captured = capsys.readouterr()
    assert captured.err == "one\n"
    assert captured.out == ""


def test_stdout_appender(capsys):
    app = stdout_appender()
    app.set_formatter(get_formatter(LogFormat.MINIMAL))
    app.set_level(LogLevel.INFO)
    app.log(rec(LogLevel.INFO, "one"))
    app.log(rec(LogLevel.DEBUG, "two"))
    captured = capsys.readouterr()
    assert captured.out == "one\n"
    assert captured.err == ""


def test_console_appender_flag():
    assert ConsoleAppender().use_stdout is False
    assert ConsoleAppender(True).use_stdout is True


def test_writer_appender():
    stream = io.StringIO()
    app = WriterAppender(stream)
    app.set_formatter(get_formatter(LogFormat.MINIMAL))
    app.set_level(LogLevel.INFO)
    app.log(rec(LogLevel.INFO, "one"))
    app.log(rec(LogLevel.DEBUG, "two"))
    assert stream.getvalue() == "one\n"


def test_writer_appender_without_writer_drops_records():
    app = WriterAppender(None)
    app.set_formatter(get_formatter(LogFormat.MINIMAL))
    app.log(rec(LogLevel.ERROR, "one"))
    assert app.format(rec(LogLevel.ERROR, "one")) == "one"


def test_error_appender_raises_and_counts():
    app = ErrorAppender()
    with pytest.raises(RuntimeError, match="^error: boom$"):
        app.log(rec(LogLevel.ERROR, "boom"))
    with pytest.raises(RuntimeError, match="^error: warn$"):
        app.log(rec(LogLevel.WARN, "warn"))
    assert app.count() == 2


def test_tagged_formatter():
    memory = MemoryAppender()
    memory.set_formatter(get_formatter(LogFormat.MINIMALTAGGED))
    memory.log(rec(LogLevel.ERROR, "one", ["blit", "blat"]))
    memory.log(rec(LogLevel.DEBUG, "one 1", ["blit", "blat"]))
    assert memory.logged_messages() == [
        "[ERROR] [blit blat] one",
        "[DEBUG] [blit blat] one 1",
    ]


def test_memory_appender_uses_default_formatter():
    previous = default_formatter()
    try:
        set_default_formatter(get_formatter(LogFormat.MINIMALTAGGED))
        memory = MemoryAppender()
        memory.log(rec(LogLevel.WARN, "one", ["a"]))
        assert memory.logged_messages() == ["[WARN] [a] one"]
    finally:
        set_default_formatter(previous)


def test_format_passes_record_times():
    at = datetime(2020, 1, 2, 3, 4, 5)
    record = LogRecord(level=LogLevel.INFO, message="hi", time=at)
    memory = MemoryAppender()
    memory.set_formatter(full_format)
    assert memory.format(record) == full_format(LogLevel.INFO, None, "hi", at, at)


def test_logged_messages_is_a_copy():
    memory = minimal_memory()
    memory.log(rec(LogLevel.INFO, "one"))
    messages = memory.logged_messages()
    messages.append("extra")
    assert memory.logged_messages() == ["one"]