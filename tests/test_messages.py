import logging
import threading

import pytest

from nfobridge.core.messages import LoggingMessageSink, Message, MessageCollector, MessageLevel, MessageSink


def test_collector_keeps_and_drains():
    collector = MessageCollector()
    collector.error("Heat", "NFO write failed", "/movies/Heat/movie.nfo")
    collector.warning("Heat", "rating ignored")

    assert len(collector) == 2
    first = collector.messages[0]
    assert first.level is MessageLevel.ERROR
    assert first.to_dict()["path"] == "/movies/Heat/movie.nfo"
    assert first.to_dict()["level"] == "error"

    drained = collector.drain()
    assert [m.level for m in drained] == [MessageLevel.ERROR, MessageLevel.WARNING]
    assert len(collector) == 0


def test_collector_forwards():
    forwarded = MessageCollector()
    collector = MessageCollector(forward=forwarded)
    collector.error("Heat", "boom")
    assert len(forwarded) == 1


def test_collector_is_thread_safe():
    collector = MessageCollector()

    def push_many():
        for i in range(200):
            collector.warning("t", str(i))

    threads = [threading.Thread(target=push_many) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(collector) == 800


def test_logging_sink(caplog):
    with caplog.at_level(logging.INFO, logger="NFOBridge"):
        LoggingMessageSink().push(Message(MessageLevel.ERROR, "Heat", "NFO write failed", "/m/movie.nfo"))
    assert "Heat: NFO write failed (/m/movie.nfo)" in caplog.text


def test_base_sink_is_abstract():
    with pytest.raises(NotImplementedError):
        MessageSink().error("x", "y")
