"""Presenter interface consumed by the orchestrator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from docker_monitor.core.schemas import MetricRow


class Presenter(ABC):
    """Renders the rows of a finished collection cycle."""

    @abstractmethod
    def render(self, rows: Sequence[MetricRow]) -> None:
        """Render rows in container enumeration order.

        Args:
            rows: One row per container that produced stats this cycle
        """
        pass
