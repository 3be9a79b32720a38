"""Route Python's standard logging module into the default tag logger."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .core import default_logger
from .loglevel import LogLevel

__all__ = ["StandardLoggingHandler", "adapt_standard_logging"]


class StandardLoggingHandler(logging.Handler):
    """Sends every standard logging record to the default logger at a fixed level."""

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        tags: Sequence[str] | None = None,
    ) -> None:
        super().__init__()
        self.log_level = level
        self.tags = tags

    def emit(self, record: logging.LogRecord) -> None:
        try:
            default_logger().log(self.log_level, self.format(record), tags=self.tags)
        except Exception:
            self.handleError(record)


def adapt_standard_logging(
    level: LogLevel = LogLevel.INFO,
    tags: Sequence[str] | None = None,
) -> StandardLoggingHandler:
    """Replace the root logger's handlers with one feeding the default logger.

    Every standard record is accepted and logged at ``level`` with ``tags``.
    """
    handler = StandardLoggingHandler(level, tags)
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(logging.NOTSET)
    return handler