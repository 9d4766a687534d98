"""Abstract collaborators of the collection pipeline.

The orchestrator and collectors only talk to these interfaces, so the
Docker-backed implementations can be swapped for fakes in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass

from docker_monitor.core.schemas import ContainerIdentity, StatSnapshot


@dataclass
class CollectorOutcome:
    """What a single collector did during one cycle."""

    container_id: str
    samples_decoded: int = 0
    rows_published: int = 0
    # Set when the stream could not be opened or failed while decoding
    error: str | None = None
    open_failed: bool = False
    timed_out: bool = False

    @property
    def failed(self) -> bool:
        return self.error is not None


class ContainerInventory(ABC):
    """Source of the running containers to monitor."""

    @abstractmethod
    def list_containers(self) -> list[ContainerIdentity]:
        """List running containers in enumeration order.

        Raises:
            InventoryError: If the runtime cannot be queried
        """
        pass


class MetricsSource(ABC):
    """Source of per-container stat snapshot streams."""

    @abstractmethod
    def open_stream(self, container_id: str) -> Iterator[StatSnapshot]:
        """Open a live stream of snapshots for one container.

        The returned iterator runs until the runtime closes the stream and
        cannot be restarted.

        Args:
            container_id: Docker container ID (short or full)

        Raises:
            StreamOpenError: If the stream cannot be opened
        """
        pass
