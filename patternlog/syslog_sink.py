"""Sink that sends messages to the system log."""

from __future__ import annotations

import syslog

from .log_msg import Level, LogMsg
from .sinks import BaseSink

_MAX_LENGTH = 2**31 - 1

_SYSLOG_LEVELS = {
    Level.TRACE: syslog.LOG_DEBUG,
    Level.DEBUG: syslog.LOG_DEBUG,
    Level.INFO: syslog.LOG_INFO,
    Level.WARN: syslog.LOG_WARNING,
    Level.ERR: syslog.LOG_ERR,
    Level.CRITICAL: syslog.LOG_CRIT,
    Level.OFF: syslog.LOG_INFO,
}


class SyslogSink(BaseSink):
    """Writes messages to syslog.

    Only the message text is sent unless ``enable_formatting`` is set, in
    which case the sink's formatter output is sent. An empty ``ident`` lets
    syslog use the program name.
    """

    def __init__(
        self,
        ident="",
        syslog_option=0,
        syslog_facility=syslog.LOG_USER,
        enable_formatting=False,
        thread_safe=True,
    ):
        super().__init__(None, thread_safe)
        self._enable_formatting = enable_formatting
        self._ident = ident
        self._closed = False
        if ident:
            syslog.openlog(ident, logoption=syslog_option, facility=syslog_facility)
        else:
            syslog.openlog(logoption=syslog_option, facility=syslog_facility)

    def close(self) -> None:
        """Close the connection to syslog."""
        if not self._closed:
            self._closed = True
            syslog.closelog()

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass

    def _sink_it(self, msg: LogMsg) -> None:
        if self._enable_formatting:
            payload = self._formatter.format(msg)
        else:
            payload = msg.payload
        syslog.syslog(_SYSLOG_LEVELS[Level(msg.level)], payload[:_MAX_LENGTH])

    def _flush(self) -> None:
        pass