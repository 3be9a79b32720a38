import syslog
from unittest import mock

import pytest

from taglog.formatter import LogFormat, get_formatter
from taglog.loglevel import LogLevel
from taglog.record import LogRecord
from taglog.syslog_appender import SysLogAppender


@pytest.fixture
def fake_syslog():
    with mock.patch("syslog.openlog") as openlog, mock.patch(
        "syslog.syslog"
    ) as send, mock.patch("syslog.closelog") as closelog:
        yield openlog, send, closelog


def make():
    app = SysLogAppender()
    app.set_formatter(get_formatter(LogFormat.MINIMAL))
    return app


@pytest.mark.parametrize(
    "level, priority",
    [
        (LogLevel.DEBUG, syslog.LOG_DEBUG),
        (LogLevel.INFO, syslog.LOG_INFO),
        (LogLevel.WARN, syslog.LOG_WARNING),
        (LogLevel.ERROR, syslog.LOG_ERR),
        (LogLevel.VERBOSE, syslog.LOG_DEBUG),
    ],
)
def test_priority_follows_level(fake_syslog, level, priority):
    _, send, _ = fake_syslog
    app = make()
    record = LogRecord(level=level, message="hello")
    assert app.check_level(level) is True
    assert app.format(record) == "hello"
    app.log(record)
    send.assert_called_once_with(priority, "hello")


def test_level_filters_records(fake_syslog):
    openlog, send, _ = fake_syslog
    app = make()
    app.set_level(LogLevel.ERROR)
    assert app.check_level(LogLevel.INFO) is False
    assert app.check_level(LogLevel.ERROR) is True
    app.log(LogRecord(level=LogLevel.INFO, message="skip"))
    assert send.call_count == 0
    assert openlog.call_count == 0


def test_opens_once_and_closes(fake_syslog):
    openlog, send, closelog = fake_syslog
    app = make()
    first = LogRecord(level=LogLevel.INFO, message="a")
    second = LogRecord(level=LogLevel.INFO, message="b")
    app.log(first)
    app.log(second)
    app.close()
    app.close()
    assert [app.format(first), app.format(second)] == ["a", "b"]
    assert openlog.call_count == 1
    assert send.call_args_list == [
        mock.call(syslog.LOG_INFO, "a"),
        mock.call(syslog.LOG_INFO, "b"),
    ]
    assert closelog.call_count == 1


def test_close_without_log_does_nothing(fake_syslog):
    openlog, _, closelog = fake_syslog
    app = make()
    app.close()
    assert app.format(LogRecord(level=LogLevel.INFO, message="still")) == "still"
    assert openlog.call_count == 0
    assert closelog.call_count == 0