"""Formatter that renders log messages according to a pattern string."""

from __future__ import annotations

import re
import time
from enum import Enum

from .flags import (
    AggregateFormatter,
    FlagFormatter,
    FormatBuffer,
    PadSide,
    PaddingInfo,
    make_flag_formatter,
)
from .log_msg import LogMsg

_MAX_PAD_WIDTH = 64
_NS_PER_SECOND = 1_000_000_000

# A flag: '%', an optional side marker, an optional width, then the flag char.
_FLAG_RE = re.compile(r"%([-=]?)(\d*)(.?)", re.DOTALL)

_SIDES = {"": PadSide.LEFT, "-": PadSide.RIGHT, "=": PadSide.CENTER}


class PatternTimeType(Enum):
    """Whether time fields are rendered in local time or in UTC."""

    LOCAL = "local"
    UTC = "utc"


def _compile_pattern(pattern: str) -> list[FlagFormatter]:
    formatters: list[FlagFormatter] = []
    pos = 0
    for match in _FLAG_RE.finditer(pattern):
        if match.start() > pos:
            formatters.append(AggregateFormatter(pattern[pos:match.start()]))
        pos = match.end()
        side, digits, flag = match.groups()
        if not flag:
            # The pattern ended inside a flag specification.
            return formatters
        width = min(int(digits), _MAX_PAD_WIDTH) if digits else 0
        formatters.append(make_flag_formatter(flag, PaddingInfo(width, _SIDES[side])))
    if pos < len(pattern):
        formatters.append(AggregateFormatter(pattern[pos:]))
    return formatters


class PatternFormatter:
    """Renders a :class:`LogMsg` as text following a pattern such as ``[%l] %v``.

    The default pattern ``%+`` gives the full layout
    ``[date time.ms] [name] [level] [file:line] text``. Every rendered message
    ends with ``eol``.
    """

    def __init__(self, pattern="%+", time_type=PatternTimeType.LOCAL, eol="\n"):
        self.pattern = pattern
        self.time_type = PatternTimeType(time_type)
        self.eol = eol
        self._formatters = _compile_pattern(pattern)
        self._last_log_secs: int | None = None
        self._cached_tm: time.struct_time | None = None

    def clone(self) -> PatternFormatter:
        """A fresh formatter with the same pattern, time type and end of line."""
        return PatternFormatter(self.pattern, self.time_type, self.eol)

    def format(self, msg: LogMsg) -> str:
        """Render ``msg``; also records its color range on the message."""
        secs = msg.time // _NS_PER_SECOND
        if secs != self._last_log_secs or self._cached_tm is None:
            self._cached_tm = self._broken_down_time(secs)
            self._last_log_secs = secs
        dest = FormatBuffer()
        for formatter in self._formatters:
            formatter.format(msg, self._cached_tm, dest)
        dest.append(self.eol)
        return str(dest)

    def _broken_down_time(self, secs: int) -> time.struct_time:
        if self.time_type is PatternTimeType.LOCAL:
            return time.localtime(secs)
        return time.gmtime(secs)