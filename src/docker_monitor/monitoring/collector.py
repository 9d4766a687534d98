"""Per-container stats collector.

A collector owns one container's stats stream for one collection cycle.
It decodes snapshots, derives a MetricRow from each snapshot and its
predecessor, and publishes the row into the shared ResultSink.

The stream is read on a daemon pump thread that hands snapshots over a
queue, so every read can be bounded by a timeout. An unresponsive container
therefore ends its collector instead of holding up the whole cycle.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator
from typing import Any

from docker_monitor.core.errors import StreamOpenError
from docker_monitor.core.schemas import ContainerIdentity, StatSnapshot
from docker_monitor.monitoring.base import CollectorOutcome, MetricsSource
from docker_monitor.monitoring.calculator import build_metric_row
from docker_monitor.monitoring.sink import ResultSink

logger = logging.getLogger(__name__)

# Message kinds passed from the pump thread to the collector
_SNAPSHOT = "snapshot"
_ERROR = "error"
_END = "end"


class ContainerStatsCollector:
    """Collects stats of a single container into a ResultSink.

    Example:
        ```python
        sink = ResultSink()
        collector = ContainerStatsCollector(identity, source, sink)
        outcome = collector.run()
        row = sink.get(identity.id)
        ```
    """

    def __init__(
        self,
        identity: ContainerIdentity,
        source: MetricsSource,
        sink: ResultSink,
        samples_per_cycle: int = 2,
        read_timeout_seconds: float = 5.0,
        emit_first_sample: bool = False,
    ) -> None:
        """Initialize the collector.

        Args:
            identity: Container to collect
            source: Metrics source used to open the stats stream
            sink: Shared sink receiving one row per decoded snapshot
            samples_per_cycle: Stop after this many decoded snapshots
            read_timeout_seconds: Max wait for each snapshot
            emit_first_sample: Publish a row for the first snapshot using a
                zero baseline instead of waiting for a second snapshot
        """
        self._identity = identity
        self._source = source
        self._sink = sink
        self._samples_per_cycle = max(1, samples_per_cycle)
        self._read_timeout = read_timeout_seconds
        self._emit_first_sample = emit_first_sample
        self._previous: StatSnapshot | None = None

    @property
    def identity(self) -> ContainerIdentity:
        return self._identity

    def run(self) -> CollectorOutcome:
        """Open the stream and collect until it ends, fails, times out or the
        per-cycle sample budget is used up.

        Never raises for per-container problems; they are logged and
        reported in the returned outcome.
        """
        outcome = CollectorOutcome(container_id=self._identity.id)
        short_id = self._identity.short_id

        try:
            stream = self._source.open_stream(self._identity.id)
        except Exception as e:
            reason = e.reason if isinstance(e, StreamOpenError) else str(e)
            logger.warning(f"Error retrieving stats for container {short_id}: {reason}")
            outcome.error = reason
            outcome.open_failed = True
            return outcome

        buffer: queue.Queue[tuple[str, Any]] = queue.Queue()
        stop = threading.Event()
        pump = threading.Thread(
            target=self._pump,
            args=(stream, buffer, stop),
            daemon=True,
            name=f"stats-{short_id}",
        )
        pump.start()

        try:
            self._read_loop(buffer, outcome)
        finally:
            stop.set()

        logger.debug(
            f"Collector {short_id} finished: {outcome.samples_decoded} samples, "
            f"{outcome.rows_published} rows"
        )
        return outcome

    @staticmethod
    def _pump(
        stream: Iterator[StatSnapshot],
        buffer: queue.Queue[tuple[str, Any]],
        stop: threading.Event,
    ) -> None:
        """Move snapshots from the stream into the buffer until told to stop."""
        try:
            for snapshot in stream:
                if stop.is_set():
                    break
                buffer.put((_SNAPSHOT, snapshot))
        except Exception as e:
            buffer.put((_ERROR, e))
        finally:
            buffer.put((_END, None))
            close = getattr(stream, "close", None)
            if callable(close):
                close()

    def _read_loop(self, buffer: queue.Queue[tuple[str, Any]], outcome: CollectorOutcome) -> None:
        short_id = self._identity.short_id

        while outcome.samples_decoded < self._samples_per_cycle:
            try:
                kind, payload = buffer.get(timeout=self._read_timeout)
            except queue.Empty:
                logger.warning(
                    f"No stats from container {short_id} within {self._read_timeout}s, stopping"
                )
                outcome.timed_out = True
                return

            if kind == _END:
                return
            if kind == _ERROR:
                logger.warning(f"Error in stats stream of container {short_id}: {payload}")
                outcome.error = str(payload)
                return

            self._handle_snapshot(payload, outcome)

    def _handle_snapshot(self, snapshot: StatSnapshot, outcome: CollectorOutcome) -> None:
        outcome.samples_decoded += 1
        previous = self._previous
        self._previous = snapshot

        if previous is None and not self._emit_first_sample:
            # First reading only establishes the CPU baseline
            return

        row = build_metric_row(self._identity, snapshot, previous)
        self._sink.publish(self._identity.id, row)
        outcome.rows_published += 1
