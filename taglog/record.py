"""The record that carries one logging request to the appenders."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .loglevel import LogLevel

__all__ = ["LogRecord", "add_tag"]


@dataclass
class LogRecord:
    """One logged message.

    ``time`` is when the record is appended and may differ from ``original``
    when the record was buffered and replayed later.
    """

    level: LogLevel
    message: str
    tags: Sequence[str] | None = None
    time: datetime = field(default_factory=datetime.now)
    original: datetime | None = None
    logger: Any = None

    def __post_init__(self) -> None:
        if self.original is None:
            self.original = self.time


def add_tag(tags: Iterable[str] | None, new_tag: str) -> list[str]:
    """Return a new list holding ``tags`` followed by ``new_tag``."""
    return [*(tags or ()), new_tag]