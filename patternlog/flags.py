"""Flag formatters: the pieces a pattern such as ``[%H:%M:%S] %v`` is built from.

Each flag formatter appends its text to a :class:`FormatBuffer`, given the
log message and the broken-down time of the message as a
:class:`time.struct_time` (as returned by :func:`time.localtime` or
:func:`time.gmtime`).
"""

from __future__ import annotations

import os
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from .log_msg import Level, LogMsg

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_FULL_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sept", "Oct", "Nov", "Dec")
_FULL_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_NS_PER_SECOND = 1_000_000_000


class PadSide(Enum):
    """Where padding goes relative to the text: LEFT pads before it."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class PaddingInfo:
    """Minimum width of a flag's output and where the filling spaces go."""

    width: int = 0
    side: PadSide = PadSide.LEFT

    def enabled(self) -> bool:
        return self.width != 0


class FormatBuffer:
    """Growing text buffer that knows its length in characters."""

    def __init__(self):
        self._parts: list[str] = []
        self._size = 0

    def append(self, text: str) -> None:
        self._parts.append(text)
        self._size += len(text)

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return "".join(self._parts)


@contextmanager
def _scoped_pad(size: int, padding: PaddingInfo, dest: FormatBuffer) -> Iterator[None]:
    """Pad around whatever is appended inside the block to reach ``padding.width``."""
    if padding.width <= size:
        yield
        return
    total = padding.width - size
    after = 0
    if padding.side is PadSide.LEFT:
        dest.append(" " * total)
    elif padding.side is PadSide.CENTER:
        half = total // 2
        dest.append(" " * half)
        after = half + (total & 1)
    else:
        after = total
    yield
    if after:
        dest.append(" " * after)


class FlagFormatter(ABC):
    """Appends one element of a pattern to the output."""

    def __init__(self, padding=None):
        self.padding = padding if padding is not None else PaddingInfo()

    @abstractmethod
    def format(self, msg: LogMsg, tm_time: time.struct_time, dest: FormatBuffer) -> None:
        """Append this element for ``msg`` to ``dest``."""


class AggregateFormatter(FlagFormatter):
    """Literal text copied to the output as is."""

    def __init__(self, text: str = ""):
        super().__init__()
        self._text = text

    def add_ch(self, ch: str) -> None:
        self._text += ch

    def format(self, msg, tm_time, dest) -> None:
        dest.append(self._text)


_Render = Callable[[LogMsg, time.struct_time], str]


class _TextFormatter(FlagFormatter):
    """Renders a piece of text and pads it.

    The padding is computed from ``field_size`` when given, otherwise from the
    length of the rendered text. With ``needs_source`` nothing is written for
    messages without a source location.
    """

    def __init__(self, padding, render: _Render, field_size=None, needs_source=False):
        super().__init__(padding)
        self._render = render
        self._field_size = field_size
        self._needs_source = needs_source

    def format(self, msg, tm_time, dest) -> None:
        if self._needs_source and msg.source.empty():
            return
        text = self._render(msg, tm_time)
        size = len(text) if self._field_size is None else self._field_size
        with _scoped_pad(size, self.padding, dest):
            dest.append(text)


class _ColorStartFormatter(FlagFormatter):
    def format(self, msg, tm_time, dest) -> None:
        msg.color_range_start = len(dest)


class _ColorStopFormatter(FlagFormatter):
    def format(self, msg, tm_time, dest) -> None:
        msg.color_range_end = len(dest)


class _ElapsedFormatter(FlagFormatter):
    """Time since the previous message, in units of ``unit_ns`` nanoseconds."""

    def __init__(self, padding, unit_ns: int):
        super().__init__(padding)
        self._unit_ns = unit_ns
        self._last_message_time = time.time_ns()

    def format(self, msg, tm_time, dest) -> None:
        delta = max(0, msg.time - self._last_message_time) // self._unit_ns
        self._last_message_time = msg.time
        with _scoped_pad(6, self.padding, dest):
            dest.append(f"{delta:06d}")


class _FullFormatter(FlagFormatter):
    """The default layout: ``[date time.ms] [name] [level] [file:line] text``."""

    def format(self, msg, tm_time, dest) -> None:
        millis = _millis(msg)
        dest.append(
            f"[{tm_time.tm_year}-{tm_time.tm_mon:02d}-{tm_time.tm_mday:02d} "
            f"{tm_time.tm_hour:02d}:{tm_time.tm_min:02d}:{tm_time.tm_sec:02d}.{millis:03d}] "
        )
        if msg.logger_name:
            dest.append(f"[{msg.logger_name}] ")
        dest.append("[")
        msg.color_range_start = len(dest)
        dest.append(Level(msg.level).label())
        msg.color_range_end = len(dest)
        dest.append("] ")
        if not msg.source.empty():
            dest.append(f"[{basename(msg.source.filename)}:{msg.source.line}] ")
        dest.append(msg.payload)


def basename(filename: str) -> str:
    """The part of ``filename`` after the last folder separator."""
    return filename[filename.rfind(os.sep) + 1:]


def _millis(msg: LogMsg) -> int:
    return (msg.time // 1_000_000) % 1000


def _micros(msg: LogMsg) -> int:
    return (msg.time // 1000) % 1_000_000


def _nanos(msg: LogMsg) -> int:
    return msg.time % _NS_PER_SECOND


def _to12h(tm_time: time.struct_time) -> int:
    return tm_time.tm_hour - 12 if tm_time.tm_hour > 12 else tm_time.tm_hour


def _ampm(tm_time: time.struct_time) -> str:
    return "PM" if tm_time.tm_hour >= 12 else "AM"


def _utc_offset_minutes(tm_time: time.struct_time) -> int:
    offset = getattr(tm_time, "tm_gmtoff", None)
    if offset is None:
        offset = -(time.altzone if tm_time.tm_isdst > 0 and time.daylight else time.timezone)
    return int(offset / 60)


def _tz_offset(msg: LogMsg, tm_time: time.struct_time) -> str:
    minutes = _utc_offset_minutes(tm_time)
    sign = "-" if minutes < 0 else "+"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _datetime_c(msg: LogMsg, tm_time: time.struct_time) -> str:
    return (
        f"{_DAYS[tm_time.tm_wday]} {_MONTHS[tm_time.tm_mon - 1]} {tm_time.tm_mday} "
        f"{tm_time.tm_hour:02d}:{tm_time.tm_min:02d}:{tm_time.tm_sec:02d} {tm_time.tm_year}"
    )


def _text(render: _Render, field_size=None, needs_source=False):
    return lambda padding: _TextFormatter(padding, render, field_size, needs_source)


def _elapsed(unit_ns: int):
    return lambda padding: _ElapsedFormatter(padding, unit_ns)


_FACTORIES: dict[str, Callable[[PaddingInfo], FlagFormatter]] = {
    "+": _FullFormatter,
    "n": _text(lambda m, t: m.logger_name),
    "l": _text(lambda m, t: Level(m.level).label()),
    "L": _text(lambda m, t: Level(m.level).short_label()),
    "t": _text(lambda m, t: str(m.thread_id)),
    "v": _text(lambda m, t: m.payload),
    "a": _text(lambda m, t: _DAYS[t.tm_wday]),
    "A": _text(lambda m, t: _FULL_DAYS[t.tm_wday]),
    "b": _text(lambda m, t: _MONTHS[t.tm_mon - 1]),
    "h": _text(lambda m, t: _MONTHS[t.tm_mon - 1]),
    "B": _text(lambda m, t: _FULL_MONTHS[t.tm_mon - 1]),
    "c": _text(_datetime_c, 24),
    "C": _text(lambda m, t: f"{t.tm_year % 100:02d}", 2),
    "Y": _text(lambda m, t: str(t.tm_year), 4),
    "D": _text(lambda m, t: f"{t.tm_mon:02d}/{t.tm_mday:02d}/{t.tm_year % 100:02d}", 10),
    "x": _text(lambda m, t: f"{t.tm_mon:02d}/{t.tm_mday:02d}/{t.tm_year % 100:02d}", 10),
    "m": _text(lambda m, t: f"{t.tm_mon:02d}", 2),
    "d": _text(lambda m, t: f"{t.tm_mday:02d}", 2),
    "H": _text(lambda m, t: f"{t.tm_hour:02d}", 2),
    "I": _text(lambda m, t: f"{_to12h(t):02d}", 2),
    "M": _text(lambda m, t: f"{t.tm_min:02d}", 2),
    "S": _text(lambda m, t: f"{t.tm_sec:02d}", 2),
    "e": _text(lambda m, t: f"{_millis(m):03d}", 3),
    "f": _text(lambda m, t: f"{_micros(m):06d}", 6),
    "F": _text(lambda m, t: f"{_nanos(m):09d}", 9),
    "E": _text(lambda m, t: str(m.time // _NS_PER_SECOND), 10),
    "p": _text(lambda m, t: _ampm(t), 2),
    "r": _text(
        lambda m, t: f"{_to12h(t):02d}:{t.tm_min:02d}:{t.tm_sec:02d} {_ampm(t)}", 11
    ),
    "R": _text(lambda m, t: f"{t.tm_hour:02d}:{t.tm_min:02d}", 5),
    "T": _text(lambda m, t: f"{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}", 8),
    "X": _text(lambda m, t: f"{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}", 8),
    "z": _text(_tz_offset, 6),
    "P": _text(lambda m, t: str(os.getpid())),
    "^": _ColorStartFormatter,
    "$": _ColorStopFormatter,
    "@": _text(lambda m, t: f"{m.source.filename}:{m.source.line}", needs_source=True),
    "s": _text(lambda m, t: basename(m.source.filename), needs_source=True),
    "g": _text(lambda m, t: m.source.filename, needs_source=True),
    "#": _text(lambda m, t: str(m.source.line), needs_source=True),
    "!": _text(lambda m, t: m.source.funcname, needs_source=True),
    "%": lambda padding: _TextFormatter(PaddingInfo(), lambda m, t: "%", 1),
    "u": _elapsed(1),
    "i": _elapsed(1_000),
    "o": _elapsed(1_000_000),
    "O": _elapsed(_NS_PER_SECOND),
}


def make_flag_formatter(flag: str, padding=None) -> FlagFormatter:
    """Build the formatter for ``%<flag>``; unknown flags are output as is."""
    padding = padding if padding is not None else PaddingInfo()
    factory = _FACTORIES.get(flag)
    if factory is None:
        return AggregateFormatter("%" + flag)
    return factory(padding)