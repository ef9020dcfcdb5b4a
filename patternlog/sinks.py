"""Sink base classes and the stream sink."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from contextlib import nullcontext

from .log_msg import Level, LogMsg

# Shared by every sink that writes to the process's own console streams.
_CONSOLE_LOCK = threading.Lock()


def _pattern_formatter(*args):
    from .pattern_formatter import PatternFormatter

    return PatternFormatter(*args)


class Sink(ABC):
    """Destination of log messages, with its own level filter."""

    def __init__(self):
        self._level = Level.TRACE

    @abstractmethod
    def log(self, msg: LogMsg) -> None:
        """Write one message."""

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered output."""

    @abstractmethod
    def set_pattern(self, pattern: str) -> None:
        """Use a pattern formatter built from ``pattern``."""

    @abstractmethod
    def set_formatter(self, formatter) -> None:
        """Use ``formatter`` for future messages."""

    def set_level(self, log_level) -> None:
        self._level = Level(log_level)

    def level(self) -> Level:
        return self._level

    def should_log(self, msg_level) -> bool:
        return msg_level >= self._level


class BaseSink(Sink):
    """Sink that handles locking and formatter management.

    Subclasses implement ``_sink_it`` and ``_flush``; both are called with the
    sink's lock held. With ``thread_safe`` false no locking is done.
    """

    def __init__(self, formatter=None, thread_safe=True):
        super().__init__()
        self._formatter = formatter if formatter is not None else _pattern_formatter()
        self._lock = threading.Lock() if thread_safe else nullcontext()

    def log(self, msg: LogMsg) -> None:
        with self._lock:
            self._sink_it(msg)

    def flush(self) -> None:
        with self._lock:
            self._flush()

    def set_pattern(self, pattern: str) -> None:
        with self._lock:
            self._set_pattern(pattern)

    def set_formatter(self, formatter) -> None:
        with self._lock:
            self._set_formatter(formatter)

    @abstractmethod
    def _sink_it(self, msg: LogMsg) -> None:
        """Write one message; the lock is held."""

    @abstractmethod
    def _flush(self) -> None:
        """Flush output; the lock is held."""

    def _set_pattern(self, pattern: str) -> None:
        self._formatter = _pattern_formatter(pattern)

    def _set_formatter(self, formatter) -> None:
        self._formatter = formatter


class StreamSink(BaseSink):
    """Writes formatted messages to a text stream."""

    def __init__(self, stream, force_flush=False, thread_safe=True):
        super().__init__(None, thread_safe)
        self._stream = stream
        self._force_flush = force_flush
        console_streams = (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__)
        if thread_safe and any(stream is s for s in console_streams):
            self._lock = _CONSOLE_LOCK

    def _sink_it(self, msg: LogMsg) -> None:
        self._stream.write(self._formatter.format(msg))
        if self._force_flush:
            self._stream.flush()

    def _flush(self) -> None:
        self._stream.flush()