# taglog

Tag based logging. Messages go to named loggers, and tags let you pick out
messages by topic, whichever logger they come from. Every logger sends its
messages to one shared set of appenders.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

## Logging

Importing `taglog.core` creates the default logger at level `INFO`, adds a
console appender that writes to standard error, and starts a background
thread that processes messages. The module-level functions log through the
default logger:

```python
from taglog import core

core.info("server started")
core.infof("listening on port %s", 8080)
core.debug("handshake complete", tags=["network", "server"])
```

Named loggers are created when first asked for. The same name returns the
same logger until `core.clear_loggers()` forgets them all:

```python
log = core.get_logger("db")
log.warnf("slow query: %s ms", 1200)
log.error("connection lost", tags=["network"])
```

Each level has a plain method (`error`, `warn`, `info`, `debug`) and a
formatting method (`errorf`, `warnf`, `infof`, `debugf`); `Logger.log(level,
*args, tags=...)` logs at any level. The formatting methods use `%`-style
formatting (`fmt % args`). The plain methods join their arguments, putting a
space only between two neighbouring arguments that are both not strings.

Verbose messages have only `verbosef`. They are dropped before they reach
any logger until `core.enable_verbose_logging()` is called, and
`core.disable_verbose_logging()` turns them off again. Verbose messages are
never buffered.

## Levels and tags

The levels, from lowest to highest, are `VERBOSE`, `DEBUG`, `INFO`, `WARN`
and `ERROR` (see `taglog.loglevel.LogLevel`). `LogLevel.DEFAULT` means
"follow the default logger's level"; a named logger starts there.
`level_from_string` accepts `error`, `warn`, `warning`, `info`,
`informative`, `debug` and `verbose` in any case, and gives `DEFAULT` for
anything else.

```python
from taglog.loglevel import LogLevel, level_from_string

core.set_default_log_level(LogLevel.WARN)
log.set_log_level(level_from_string("debug"))
```

A tag level lets tagged messages through even when the logger's own level
would stop them. A logger checks its own tag levels and those of the
default logger:

```python
core.set_default_tag_log_level("network", LogLevel.DEBUG)
log.set_tag_level("cache", LogLevel.DEBUG)
core.check_level(LogLevel.DEBUG, ["network"])   # True
log.check_level(LogLevel.DEBUG, ["cache"])      # True
```

## Buffers and replay

A logger with a buffer keeps the most recent messages that its level stopped
(verbose messages excepted). When its level or tag levels change, the buffer
is replayed through the new settings; changing the default logger's level or
tag levels replays every logger's buffer. With the full format, replayed
lines show the time of the original message.

```python
core.set_default_buffer_length(100)   # also given to loggers without a buffer
log.set_buffer_length(20)             # 0 removes the buffer
```

New named loggers get the default logger's buffer length.

## Appenders

Appenders decide where messages end up. Each appender can have its own
level and formatter; an appender without a formatter uses the default one.

```python
from taglog.appender import MemoryAppender, WriterAppender, stdout_appender
from taglog.formatter import LogFormat, get_formatter
from taglog.rolling import RollingFileAppender

core.clear_appenders()

console = stdout_appender()
console.set_formatter(get_formatter(LogFormat.SIMPLE))
core.add_appender(console)

files = RollingFileAppender("/var/log/myapp", "log", 1024 * 1024, 5)
files.set_level(LogLevel.WARN)
core.add_appender(files)
```

The available appenders are:

- `ConsoleAppender`, made by `stderr_appender()` or `stdout_appender()`;
- `WriterAppender`, which writes each line and a newline to a text stream;
- `RollingFileAppender(prefix, suffix, max_file_size, max_files)`, which
  writes to `prefix.suffix` and rolls older files to `prefix.1.suffix`,
  `prefix.2.suffix` and so on. `max_files` is at least 1 and
  `max_file_size` at least 1024 bytes; with one file the size is ignored.
  `roll()` rolls by hand;
- `SysLogAppender`, which writes to the system log with a priority matching
  the level. Creating it raises `OSError` where Python has no `syslog`
  module;
- `MemoryAppender`, whose `logged_messages()` returns every formatted line;
- `NullAppender`, which only counts messages (`count()`) and ignores its
  level;
- `ErrorAppender`, which counts and then fails on every message, for testing
  error handling.

`core.clear_appenders()` closes and removes every appender.

There are four formats, named by `LogFormat`: `full` (time to the
millisecond, level, tags, message, replays marked), `simple` (time, level,
message), `minimaltagged` (level, tags, message) and `minimal` (message
only). `format_from_string` turns a name in any case into a `LogFormat`,
giving `SIMPLE` for unknown names, and `get_formatter` returns the function
for a format. `set_default_formatter` sets the formatter used by appenders
that have none of their own; it starts as `full_format`.

## Processing

Messages are handled on a background thread. Call `core.wait_for_incoming()`
to block until every queued message has been processed. Use
`core.pause_logging()` and `core.restart_logging()` to hold processing while
you change the configuration. `core.stop_logging()` shuts processing down for
good; calling it a second time raises `core.LoggingError`.

Appender failures are never raised to the caller. Pass a `queue.Queue` to
`core.capture_logging_errors()` to collect them as `core.LoggingError`
objects; they are put without blocking, so a full queue drops them.

## Standard library logging

`taglog.stdlog.adapt_standard_logging(level, tags)` replaces the root
logger's handlers with a `StandardLoggingHandler` and sets the root level so
that every record passes. Each record from Python's `logging` module is then
logged through the default logger at the given level and with the given
tags. The handler is returned.

## What is not included

There is no command-line program and no configuration file reader; logging
is set up from Python code.