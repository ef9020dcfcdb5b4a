import io
import threading

import pytest

from patternlog.log_msg import Level, LogMsg
from patternlog.sinks import BaseSink, Sink, StreamSink


class PayloadFormatter:
    def format(self, msg):
        return msg.payload + "\n"


class UpperFormatter:
    def format(self, msg):
        return msg.payload.upper() + "\n"


class FlushCountingStream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class CollectingSink(BaseSink):
    def __init__(self, thread_safe=True):
        super().__init__(PayloadFormatter(), thread_safe)
        self.lines = []
        self.flushed = 0

    def _sink_it(self, msg):
        self.lines.append(self._formatter.format(msg))

    def _flush(self):
        self.flushed += 1


def _msg(text, level=Level.INFO):
    return LogMsg("tester", level, text)


def _stream_sink(stream, force_flush=False, thread_safe=True):
    sink = StreamSink(stream, force_flush, thread_safe)
    sink.set_formatter(PayloadFormatter())
    return sink


def test_stream_sink_writes_formatted_messages():
    out = io.StringIO()
    sink = _stream_sink(out)
    sink.log(_msg("Test message 1"))
    sink.log(_msg("Test message 2"))
    assert out.getvalue() == "Test message 1\nTest message 2\n"


def test_stream_sink_without_locking_gives_same_output():
    out = io.StringIO()
    sink = _stream_sink(out, thread_safe=False)
    sink.log(_msg("hello"))
    assert out.getvalue() == "hello\n"


def test_default_level_accepts_everything():
    sink = _stream_sink(io.StringIO())
    assert sink.level() is Level.TRACE
    assert all(sink.should_log(lvl) for lvl in Level)


def test_set_level_filters():
    sink = _stream_sink(io.StringIO())
    sink.set_level(Level.WARN)
    assert sink.level() is Level.WARN
    assert sink.should_log(Level.INFO) is False
    assert sink.should_log(Level.WARN) is True
    assert sink.should_log(Level.ERR) is True


def test_force_flush_flushes_every_message():
    stream = FlushCountingStream()
    sink = _stream_sink(stream, force_flush=True)
    sink.log(_msg("a"))
    sink.log(_msg("b"))
    assert stream.flushes == 2


def test_no_force_flush_waits_for_flush_call():
    stream = FlushCountingStream()
    sink = _stream_sink(stream)
    sink.log(_msg("a"))
    assert stream.flushes == 0
    sink.flush()
    assert stream.flushes == 1


def test_set_formatter_replaces_formatter():
    out = io.StringIO()
    sink = _stream_sink(out)
    sink.log(_msg("before"))
    sink.set_formatter(UpperFormatter())
    sink.log(_msg("after"))
    assert out.getvalue() == "before\nAFTER\n"


def test_sink_is_abstract():
    with pytest.raises(TypeError):
        Sink()


def test_base_sink_is_abstract():
    with pytest.raises(TypeError):
        BaseSink(PayloadFormatter(), True)


@pytest.mark.parametrize("thread_safe", [True, False])
def test_custom_base_sink_log_and_flush(thread_safe):
    sink = CollectingSink(thread_safe)
    sink.log(_msg("x"))
    sink.flush()
    assert sink.lines == ["x\n"]
    assert sink.flushed == 1


def test_concurrent_logging_keeps_every_message():
    out = io.StringIO()
    sink = _stream_sink(out)
    per_thread = 200

    def worker(n):
        for i in range(per_thread):
            sink.log(_msg(f"{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    expected = sorted(f"{n}-{i}" for n in range(4) for i in range(per_thread))
    assert sorted(out.getvalue().splitlines()) == expected