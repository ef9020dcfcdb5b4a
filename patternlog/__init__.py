"""Log records, pattern formatters, and stream, daily file and syslog sinks."""

__version__ = "0.1.0"