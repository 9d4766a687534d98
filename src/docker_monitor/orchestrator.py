"""Collection orchestrator driving the stats pipeline.

This module coordinates one collection cycle:
- Listing running containers through the inventory
- Running one collector per container on a bounded thread pool
- Waiting for every collector before the sink is read
- Handing the rows, in enumeration order, to the presenter

Per-container failures stay inside their collector; only an inventory
failure ends the cycle.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from docker_monitor.core.schemas import ContainerIdentity, MetricRow, MonitorConfig
from docker_monitor.monitoring.base import CollectorOutcome, ContainerInventory, MetricsSource
from docker_monitor.monitoring.collector import ContainerStatsCollector
from docker_monitor.monitoring.sink import ResultSink
from docker_monitor.presenters.base import Presenter

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """Result of one collection cycle."""

    rows: list[MetricRow] = field(default_factory=list)
    outcomes: list[CollectorOutcome] = field(default_factory=list)
    # Container ID -> error message for collectors that failed
    failures: dict[str, str] = field(default_factory=dict)


class CollectionOrchestrator:
    """Runs collection cycles over all running containers.

    Example:
        ```python
        client = connect_docker(config)
        orchestrator = CollectionOrchestrator(
            inventory=DockerInventory(client),
            source=DockerMetricsSource(client),
            presenter=TablePresenter(),
            config=config,
        )
        orchestrator.run_once()
        ```
    """

    def __init__(
        self,
        inventory: ContainerInventory,
        source: MetricsSource,
        presenter: Presenter,
        config: MonitorConfig | None = None,
    ) -> None:
        self._inventory = inventory
        self._source = source
        self._presenter = presenter
        self.config = config or MonitorConfig()

    def collect(self, sink: ResultSink | None = None) -> CycleResult:
        """Run one collection cycle without rendering.

        Args:
            sink: Sink to publish into. A fresh sink is used when omitted;
                refresh mode passes a persistent one so rows of containers
                that failed this cycle stay visible.

        Returns:
            CycleResult with rows in inventory order

        Raises:
            InventoryError: If running containers cannot be listed
        """
        containers = self._inventory.list_containers()
        logger.debug(f"Collecting stats for {len(containers)} containers")

        if sink is None:
            sink = ResultSink()
        else:
            sink.prune(c.id for c in containers)

        result = CycleResult()
        if containers:
            result.outcomes = self._run_collectors(containers, sink)

        for outcome in result.outcomes:
            if outcome.failed:
                result.failures[outcome.container_id] = outcome.error or "unknown error"

        result.rows = sink.ordered(c.id for c in containers)
        return result

    def run_once(self, sink: ResultSink | None = None) -> CycleResult:
        """Collect once and render the rows."""
        result = self.collect(sink)
        self._presenter.render(result.rows)
        return result

    def run_forever(
        self,
        interval: float | None = None,
        max_cycles: int | None = None,
        stop_event: threading.Event | None = None,
    ) -> int:
        """Repeat collection cycles until stopped.

        Args:
            interval: Seconds between cycles (config value when omitted)
            max_cycles: Stop after this many cycles (None = no limit)
            stop_event: Event that ends the loop when set

        Returns:
            Number of completed cycles

        Raises:
            InventoryError: If running containers cannot be listed
        """
        if interval is None:
            interval = self.config.refresh_interval_seconds
        if stop_event is None:
            stop_event = threading.Event()

        sink = ResultSink()
        cycles = 0
        while not stop_event.is_set():
            self.run_once(sink)
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            stop_event.wait(timeout=interval)
        return cycles

    def _run_collectors(
        self, containers: list[ContainerIdentity], sink: ResultSink
    ) -> list[CollectorOutcome]:
        worker_count = min(self.config.max_workers, len(containers))
        outcomes: list[CollectorOutcome] = []

        with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="collector") as executor:
            futures = {
                executor.submit(self._make_collector(container, sink).run): container
                for container in containers
            }
            for future in as_completed(futures):
                container = futures[future]
                try:
                    outcomes.append(future.result())
                except Exception as e:
                    logger.exception(f"Collector for {container.short_id} crashed")
                    outcomes.append(CollectorOutcome(container_id=container.id, error=str(e)))

        order = {c.id: i for i, c in enumerate(containers)}
        outcomes.sort(key=lambda o: order[o.container_id])
        return outcomes

    def _make_collector(self, container: ContainerIdentity, sink: ResultSink) -> ContainerStatsCollector:
        return ContainerStatsCollector(
            identity=container,
            source=self._source,
            sink=sink,
            samples_per_cycle=self.config.samples_per_cycle,
            read_timeout_seconds=self.config.read_timeout_seconds,
            emit_first_sample=self.config.emit_first_sample,
        )
