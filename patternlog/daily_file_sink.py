"""File sink that starts a new, date-stamped file every day at a set time."""

from __future__ import annotations

import time
from collections.abc import Callable

from .file_helper import FileHelper, split_by_extension
from .log_msg import LogError, LogMsg
from .sinks import BaseSink

_NS_PER_SECOND = 1_000_000_000
_SECONDS_PER_DAY = 24 * 60 * 60


def daily_filename(filename: str, now_tm: time.struct_time) -> str:
    """File name of the form ``basename_YYYY-MM-DD.ext`` for the given date."""
    basename, ext = split_by_extension(filename)
    return f"{basename}_{now_tm.tm_year:04d}-{now_tm.tm_mon:02d}-{now_tm.tm_mday:02d}{ext}"


class DailyFileSink(BaseSink):
    """Writes to a file named after the current date, rotating daily.

    A new file is opened when a message arrives at or after the rotation time
    (``rotation_hour``:``rotation_minute`` local time). File names are made by
    ``filename_calculator(base_filename, struct_time)``.
    """

    def __init__(
        self,
        base_filename,
        rotation_hour=0,
        rotation_minute=0,
        truncate=False,
        filename_calculator: Callable[[str, time.struct_time], str] = daily_filename,
        thread_safe=True,
    ):
        if not 0 <= rotation_hour <= 23 or not 0 <= rotation_minute <= 59:
            raise LogError("daily_file_sink: Invalid rotation time in ctor")
        super().__init__(None, thread_safe)
        self._base_filename = str(base_filename)
        self._rotation_h = rotation_hour
        self._rotation_m = rotation_minute
        self._truncate = truncate
        self._calc_filename = filename_calculator
        self._file = FileHelper()
        self._file.open(self._calc_filename(self._base_filename, time.localtime()), truncate)
        self._rotation_tp = self._next_rotation_tp()

    def filename(self) -> str:
        """Name of the file currently written to."""
        return self._file.filename()

    def close(self) -> None:
        """Close the current file."""
        with self._lock:
            self._file.close()

    def _sink_it(self, msg: LogMsg) -> None:
        if msg.time >= self._rotation_tp:
            now_tm = time.localtime(msg.time // _NS_PER_SECOND)
            self._file.open(self._calc_filename(self._base_filename, now_tm), self._truncate)
            self._rotation_tp = self._next_rotation_tp()
        self._file.write(self._formatter.format(msg))

    def _flush(self) -> None:
        self._file.flush()

    def _next_rotation_tp(self) -> int:
        now = time.time()
        tm = time.localtime(now)
        rotation = time.mktime(
            (
                tm.tm_year,
                tm.tm_mon,
                tm.tm_mday,
                self._rotation_h,
                self._rotation_m,
                0,
                tm.tm_wday,
                tm.tm_yday,
                tm.tm_isdst,
            )
        )
        if rotation <= now:
            rotation += _SECONDS_PER_DAY
        return int(rotation) * _NS_PER_SECOND