"""Tests for ResultSink."""

import threading

from docker_monitor.core.schemas import MetricRow
from docker_monitor.monitoring.sink import ResultSink


def make_row(container_id: str, pids: int = 1) -> MetricRow:
    return MetricRow(
        container_id=container_id,
        name=f"c-{container_id}",
        cpu_percent=0.0,
        mem_usage="0 B",
        mem_limit="0 B",
        mem_percent=0.0,
        block_input="0 B",
        block_output="0 B",
        pids=pids,
    )


class TestResultSink:
    """Tests for ResultSink class."""

    def test_publish_replaces(self):
        """Test a second publish for the same container replaces the row."""
        sink = ResultSink()
        sink.publish("a", make_row("a", pids=1))
        sink.publish("a", make_row("a", pids=2))

        assert len(sink) == 1
        assert sink.get("a").pids == 2

    def test_ordered(self):
        """Test rows come back in the requested order, skipping missing IDs."""
        sink = ResultSink()
        for cid in ("c", "a", "b"):
            sink.publish(cid, make_row(cid))

        rows = sink.ordered(["a", "x", "b", "c"])

        assert [r.container_id for r in rows] == ["a", "b", "c"]

    def test_prune(self):
        """Test rows of vanished containers are dropped."""
        sink = ResultSink()
        sink.publish("a", make_row("a"))
        sink.publish("b", make_row("b"))

        sink.prune(["b"])

        assert "a" not in sink
        assert "b" in sink

    def test_snapshot_is_copy(self):
        """Test snapshot() is detached from the sink."""
        sink = ResultSink()
        sink.publish("a", make_row("a"))

        copy = sink.snapshot()
        sink.publish("b", make_row("b"))

        assert list(copy) == ["a"]

    def test_concurrent_publish(self):
        """Test many threads writing their own keys lose no entries."""
        sink = ResultSink()
        start = threading.Barrier(20)

        def writer(index: int) -> None:
            start.wait()
            for pids in range(200):
                sink.publish(f"c{index}", make_row(f"c{index}", pids=pids))

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(sink) == 20
        for i in range(20):
            row = sink.get(f"c{i}")
            assert row.name == f"c-c{i}"
            assert row.pids == 199
