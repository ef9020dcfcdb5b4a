"""File handling shared by the file sinks."""

from __future__ import annotations

import builtins
import os
import time
from typing import IO

from .log_msg import LogError

_OPEN_TRIES = 5
_OPEN_INTERVAL = 0.01


def split_by_extension(fname: str) -> tuple[str, str]:
    """Split a path into its stem and extension.

    A leading dot in the file name (hidden files) does not start an extension,
    nor does a trailing dot.
    """
    ext_index = fname.rfind(".")
    if ext_index <= 0 or ext_index == len(fname) - 1:
        return fname, ""
    folder_index = max(fname.rfind("/"), fname.rfind(os.sep))
    if folder_index != -1 and folder_index >= ext_index - 1:
        return fname, ""
    return fname[:ext_index], fname[ext_index:]


class FileHelper:
    """An output file that retries opening and raises LogError on failure."""

    def __init__(self):
        self._fd: IO[bytes] | None = None
        self._filename = ""

    def __enter__(self) -> FileHelper:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass

    def open(self, fname, truncate=False) -> None:
        """Open ``fname`` for appending, or for writing from scratch if ``truncate``."""
        self.close()
        self._filename = os.fspath(fname)
        mode = "wb" if truncate else "ab"
        last_error: OSError | None = None
        for attempt in range(_OPEN_TRIES):
            try:
                self._fd = builtins.open(self._filename, mode)
                return
            except OSError as exc:
                last_error = exc
                if attempt + 1 < _OPEN_TRIES:
                    time.sleep(_OPEN_INTERVAL)
        raise LogError(f"Failed opening file {self._filename} for writing") from last_error

    def reopen(self, truncate) -> None:
        """Open the last opened file again."""
        if not self._filename:
            raise LogError("Failed re opening file - was not opened before")
        self.open(self._filename, truncate)

    def flush(self) -> None:
        if self._fd is not None:
            self._fd.flush()

    def close(self) -> None:
        if self._fd is not None:
            self._fd.close()
            self._fd = None

    def write(self, data) -> None:
        """Write text (encoded as UTF-8) or bytes to the file."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        if self._fd is None:
            raise LogError(f"Failed writing to file {self._filename}")
        try:
            self._fd.write(data)
        except (OSError, ValueError) as exc:
            raise LogError(f"Failed writing to file {self._filename}") from exc

    def size(self) -> int:
        """Current size of the open file in bytes, including unflushed writes."""
        if self._fd is None:
            raise LogError(f"Cannot use size() on closed file {self._filename}")
        self._fd.flush()
        return os.fstat(self._fd.fileno()).st_size

    def filename(self) -> str:
        return self._filename

    @staticmethod
    def file_exists(fname) -> bool:
        return os.path.exists(fname)