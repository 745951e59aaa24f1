import threading

import pytest

from webpconverter.logsink import LogBuffer, LogSink


def test_lines_delivered_in_order_before_close_returns():
    seen = []
    with LogSink(seen.append) as sink:
        for i in range(100):
            sink.append(f"line {i}")
    assert seen == [f"line {i}" for i in range(100)]


def test_concurrent_appends_are_not_lost_or_garbled():
    seen = []
    sink = LogSink(seen.append)

    def worker(n):
        for i in range(50):
            sink.append(f"w{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    sink.close()

    assert sorted(seen) == sorted(f"w{n}-{i}" for n in range(8) for i in range(50))


def test_observer_runs_on_single_consumer_thread():
    names = set()
    with LogSink(lambda line: names.add(threading.current_thread().name)) as sink:
        threads = [threading.Thread(target=sink.append, args=("x",)) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
    assert names == {"logsink"}


def test_append_after_close_raises():
    sink = LogSink()
    sink.close()
    sink.close()
    with pytest.raises(RuntimeError):
        sink.append("late")


def test_failing_observer_does_not_stop_delivery():
    seen = []

    def observer(line):
        if line == "boom":
            raise ValueError(line)
        seen.append(line)

    with LogSink(observer) as sink:
        sink.append("a")
        sink.append("boom")
        sink.append("b")
    assert seen == ["a", "b"]


def test_log_buffer_errors_only_and_clear():
    buf = LogBuffer()
    buf("Starting conversion from: in")
    buf("Converted: in/a.png")
    buf("Error: bad file")
    buf("\nFinished processing all files\nSuccess: 1\nErrors: 1\nTotal: 2")

    assert "Converted: in/a.png" in buf.text()
    filtered = buf.text(errors_only=True).splitlines()
    assert "Converted: in/a.png" not in filtered
    assert "Error: bad file" in filtered
    assert "Total: 2" in filtered

    buf.clear()
    assert buf.lines() == []
    assert buf.text() == ""
