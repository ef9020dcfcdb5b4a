import syslog
from unittest import mock

import pytest

from patternlog.log_msg import Level, LogMsg
from patternlog.syslog_sink import SyslogSink


class FakeSyslog:
    def __init__(self):
        self.events = []
        self.opened = []
        self.messages = []

    def openlog(self, *args, **kwargs):
        self.events.append("openlog")
        self.opened.append((args, kwargs))

    def syslog(self, priority, message):
        self.events.append("syslog")
        self.messages.append((priority, message))

    def closelog(self):
        self.events.append("closelog")


@pytest.fixture
def fake_syslog():
    fake = FakeSyslog()
    with mock.patch("syslog.openlog", fake.openlog), mock.patch("syslog.syslog", fake.syslog), mock.patch(
        "syslog.closelog", fake.closelog
    ):
        yield fake


def test_openlog_receives_ident_option_and_facility(fake_syslog):
    sink = SyslogSink("example-ident", syslog.LOG_PID, syslog.LOG_USER)
    sink.close()
    assert fake_syslog.opened == [
        (("example-ident",), {"logoption": syslog.LOG_PID, "facility": syslog.LOG_USER})
    ]


def test_empty_ident_is_not_passed(fake_syslog):
    sink = SyslogSink()
    default_level = sink.level()
    sink.close()
    assert default_level is Level.TRACE
    assert fake_syslog.opened == [((), {"logoption": 0, "facility": syslog.LOG_USER})]


@pytest.mark.parametrize(
    "level, priority",
    [
        (Level.TRACE, syslog.LOG_DEBUG),
        (Level.DEBUG, syslog.LOG_DEBUG),
        (Level.INFO, syslog.LOG_INFO),
        (Level.WARN, syslog.LOG_WARNING),
        (Level.ERR, syslog.LOG_ERR),
        (Level.CRITICAL, syslog.LOG_CRIT),
        (Level.OFF, syslog.LOG_INFO),
    ],
)
def test_level_maps_to_priority(fake_syslog, level, priority):
    sink = SyslogSink("example-ident")
    msg = LogMsg("logger", level, "hello")
    accepted = sink.should_log(msg.level)
    sink.log(msg)
    sink.close()
    assert accepted is True
    assert fake_syslog.messages == [(priority, msg.payload)]


def test_payload_sent_unformatted_by_default(fake_syslog):
    sink = SyslogSink("example-ident")
    sink.set_pattern("[%l] %v")
    msg = LogMsg("logger", Level.WARN, "disk almost full")
    sink.log(msg)
    sink.close()
    assert msg.payload == "disk almost full"
    assert fake_syslog.messages == [(syslog.LOG_WARNING, msg.payload)]


def test_formatting_enabled_uses_pattern(fake_syslog):
    sink = SyslogSink("example-ident", enable_formatting=True)
    sink.set_pattern("[%l] %v")
    msg = LogMsg("logger", Level.INFO, "hello")
    sink.log(msg)
    sink.close()
    assert fake_syslog.messages == [(syslog.LOG_INFO, f"[{msg.level.label()}] {msg.payload}\n")]
    assert fake_syslog.messages == [(syslog.LOG_INFO, "[info] hello\n")]


def test_close_is_done_once(fake_syslog):
    sink = SyslogSink("example-ident")
    msg = LogMsg("logger", Level.INFO, "once")
    sink.log(msg)
    sink.close()
    sink.close()
    assert fake_syslog.events == ["openlog", "syslog", "closelog"]
    assert fake_syslog.messages == [(syslog.LOG_INFO, msg.payload)]


def test_sink_level_filter(fake_syslog):
    sink = SyslogSink("example-ident")
    sink.set_level(Level.ERR)
    assert sink.level() is Level.ERR
    assert sink.should_log(Level.CRITICAL)
    assert not sink.should_log(Level.WARN)
    sink.close()