"""Thread-safe store of the latest row per container."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from docker_monitor.core.schemas import MetricRow


class ResultSink:
    """Mapping of container ID to its latest MetricRow.

    Every collector writes only its own container's entry; the lock protects
    the dict itself from concurrent inserts.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: dict[str, MetricRow] = {}

    def publish(self, container_id: str, row: MetricRow) -> None:
        """Insert or replace the row of a container."""
        with self._lock:
            self._rows[container_id] = row

    def get(self, container_id: str) -> MetricRow | None:
        with self._lock:
            return self._rows.get(container_id)

    def snapshot(self) -> dict[str, MetricRow]:
        """Return a copy of all rows."""
        with self._lock:
            return dict(self._rows)

    def ordered(self, container_ids: Iterable[str]) -> list[MetricRow]:
        """Return rows in the given ID order, skipping containers without a row."""
        with self._lock:
            return [self._rows[cid] for cid in container_ids if cid in self._rows]

    def prune(self, keep_ids: Iterable[str]) -> None:
        """Drop rows of containers that are no longer running."""
        keep = set(keep_ids)
        with self._lock:
            for cid in [cid for cid in self._rows if cid not in keep]:
                del self._rows[cid]

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __contains__(self, container_id: object) -> bool:
        with self._lock:
            return container_id in self._rows
