"""Tag based logging with named loggers, tag levels, replay buffers and appenders."""

__version__ = "0.1.0"
__all__ = [
    "appender",
    "core",
    "formatter",
    "loglevel",
    "record",
    "rolling",
    "stdlog",
    "syslog_appender",
]