# patternlog

Render log records through compact `%`-flag patterns and write them to
sinks: any text stream, a file that starts afresh every day, or the system
log.

## Install

```
pip install patternlog
```

No third-party libraries are needed.

## Log records

`patternlog.log_msg` holds the building blocks:

- `Level` — `TRACE`, `DEBUG`, `INFO`, `WARN`, `ERR`, `CRITICAL`, `OFF`
  (an `IntEnum`, so levels compare by severity). `label()` gives the full
  name (`"info"`, `"warning"`, `"error"`, ...) and `short_label()` one
  letter (`"I"`, `"W"`, `"E"`, ...).
- `SourceLoc(filename, line, funcname)` — where a message was logged;
  `empty()` is true when `line` is 0.
- `LogMsg(logger_name, level, payload, source=..., time=..., thread_id=...)`
  — one record. `time` is nanoseconds since the epoch and defaults to now;
  `thread_id` defaults to the current thread. A formatter stores the colour
  range it marked in `color_range_start` and `color_range_end`.
- `LogError` — raised for invalid settings and file failures.

## Patterns

`patternlog.pattern_formatter.PatternFormatter(pattern="%+",
time_type=PatternTimeType.LOCAL, eol="\n")` turns a `LogMsg` into text with
`format(msg)`; `eol` is appended to every line. `PatternTimeType.UTC` renders
time fields in UTC instead of local time. `clone()` returns a fresh formatter
with the same settings.

Plain characters are copied as they are. A `%` followed by a flag inserts a
field:

| Flag | Field |
|------|-------|
| `%v` | message text |
| `%n` | logger name |
| `%l` / `%L` | level name / one-letter level |
| `%t` / `%P` | thread id / process id |
| `%Y %C %m %d` | year, 2-digit year, month, day |
| `%H %I %M %S` | hour (24h, 12h), minute, second |
| `%e %f %F` | milliseconds, microseconds, nanoseconds of the second |
| `%E` | seconds since the epoch |
| `%a %A` | weekday name, short and full |
| `%b %h %B` | month name, short (`Sept` for September) and full |
| `%c` | date and time, e.g. `Thu Aug 23 15:35:46 2014` |
| `%D %x` | `MM/DD/YY` |
| `%r` | 12-hour time with AM/PM |
| `%R` | `HH:MM` |
| `%T %X` | `HH:MM:SS` |
| `%p` | `AM` / `PM` |
| `%z` | UTC offset, `+HH:MM` |
| `%s %g` | source file name without / with its directory |
| `%#` `%!` `%@` | source line, function, `file:line` |
| `%o %i %u %O` | time since the previous message, in ms, µs, ns, s |
| `%^ ... %$` | marks the colour range on the message |
| `%+` | the full layout `[date time.ms] [name] [level] [file:line] text` |
| `%%` | a literal `%` |

Source fields write nothing when the message has no source location.
Unknown flags are written as they appear (`%q` stays `%q`). A width between
`%` and the flag pads the field with spaces: `%8l` pads on the left, `%-8l`
on the right, `%=8l` on both sides. Widths are capped at 64, and text longer
than the width is never cut.

```python
from patternlog.log_msg import Level, LogMsg
from patternlog.pattern_formatter import PatternFormatter, PatternTimeType

formatter = PatternFormatter("[%-8l] %v", PatternTimeType.LOCAL, "\n")
msg = LogMsg(logger_name="app", level=Level.INFO, payload="started")
print(formatter.format(msg), end="")   # [info    ] started
```

The individual field renderers live in `patternlog.flags`:
`make_flag_formatter(flag, padding)` builds one, `PaddingInfo(width, side)`
with `PadSide.LEFT`, `RIGHT` or `CENTER` describes its padding, and each
writes into a `FormatBuffer`.

## Sinks

Every sink has a level filter (`set_level`, `level`, `should_log`; all levels
pass by default), a formatter (`set_pattern`, `set_formatter`; the default is
`PatternFormatter()`), `log(msg)` and `flush()`. With `thread_safe=True`, the
default, calls are serialised with a lock. `log` writes whatever it is given;
checking `should_log` first is up to the caller.

`patternlog.sinks.StreamSink(stream, force_flush=False, thread_safe=True)`
writes to any text stream; with `force_flush` it flushes after every message.
Sinks on `sys.stdout` or `sys.stderr` share one lock.

```python
import io
from patternlog.log_msg import Level, LogMsg
from patternlog.sinks import StreamSink

stream = io.StringIO()
sink = StreamSink(stream)
sink.set_pattern("%v")
sink.set_level(Level.WARN)
msg = LogMsg(logger_name="app", level=Level.ERR, payload="disk full")
if sink.should_log(msg.level):
    sink.log(msg)
print(stream.getvalue(), end="")   # disk full
```

New sinks subclass `patternlog.sinks.BaseSink` and implement `_sink_it(msg)`
and `_flush()`.

### Daily files

`patternlog.daily_file_sink.DailyFileSink(base_filename, rotation_hour=0,
rotation_minute=0, truncate=False, filename_calculator=daily_filename,
thread_safe=True)` writes to a file named after the current date and opens a
new one for the first message at or after the rotation time each day.
`daily_filename("logs/daily.txt", time.localtime())` gives
`logs/daily_YYYY-MM-DD.txt`; any callable taking the base name and a
`time.struct_time` can be passed instead. A rotation time outside 0–23 hours
or 0–59 minutes raises `LogError`, and so does a file that cannot be opened
(the directory must already exist). `filename()` names the current file and
`close()` closes it.

```python
from patternlog.daily_file_sink import DailyFileSink

sink = DailyFileSink("logs/daily.txt", 2, 30)
sink.log(msg)
sink.flush()
print(sink.filename())
sink.close()
```

The file handling itself is in `patternlog.file_helper`: `FileHelper` opens
(retrying a few times), writes, flushes and reports the size of a file, and
`split_by_extension` splits `"logs/app.txt"` into `("logs/app", ".txt")`,
leaving hidden-file dots alone.

### System log

`patternlog.syslog_sink.SyslogSink(ident="", syslog_option=0,
syslog_facility=syslog.LOG_USER, enable_formatting=False, thread_safe=True)`
sends each message to syslog at the priority matching its level. Only the
message text is sent unless `enable_formatting` is set. An empty `ident`
lets syslog use the program name. Call `close()` when done. This module
relies on Python's `syslog` module and so works only on Unix-like systems.

## What is not included

The package provides records, formatters and sinks only. There is no logger
object, no registry of named loggers or default logger, no asynchronous
logging, no coloured console output and no size-based file rotation.

## Tests

```
pip install -e .[test]
pytest
```