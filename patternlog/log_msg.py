"""Log levels, source locations and the log message record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from threading import get_ident
from time import time_ns


class LogError(Exception):
    """Raised when a logger, sink or file operation fails."""


class Level(IntEnum):
    """Severity of a log message, ordered from most to least verbose."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERR = 4
    CRITICAL = 5
    OFF = 6

    def label(self) -> str:
        """Full lower-case name of the level."""
        return _LEVEL_NAMES[self]

    def short_label(self) -> str:
        """One-letter name of the level."""
        return _SHORT_LEVEL_NAMES[self]


_LEVEL_NAMES = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERR: "error",
    Level.CRITICAL: "critical",
    Level.OFF: "off",
}

_SHORT_LEVEL_NAMES = {
    Level.TRACE: "T",
    Level.DEBUG: "D",
    Level.INFO: "I",
    Level.WARN: "W",
    Level.ERR: "E",
    Level.CRITICAL: "C",
    Level.OFF: "O",
}


@dataclass(frozen=True)
class SourceLoc:
    """Where in the calling code a message was logged."""

    filename: str = ""
    line: int = 0
    funcname: str = ""

    def empty(self) -> bool:
        """True when no source location was recorded."""
        return self.line == 0


@dataclass
class LogMsg:
    """A single log record as handed to sinks and formatters.

    ``time`` is nanoseconds since the epoch. The color range is filled in by
    the formatter to mark the part of the output that should be colored.
    """

    logger_name: str
    level: Level
    payload: str
    source: SourceLoc = field(default_factory=SourceLoc)
    time: int = field(default_factory=time_ns)
    thread_id: int = field(default_factory=get_ident)
    color_range_start: int = 0
    color_range_end: int = 0