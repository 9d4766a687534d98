"""Exception hierarchy for docker-monitor.

Fatal errors (connection, inventory) propagate to the CLI and end the process.
StreamOpenError is per-container and never escapes a collector.
"""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for all docker-monitor errors."""


class DockerConnectionError(MonitorError):
    """The Docker daemon could not be reached."""


class InventoryError(MonitorError):
    """Listing running containers failed."""


class StreamOpenError(MonitorError):
    """The stats stream of a single container could not be opened."""

    def __init__(self, container_id: str, reason: str) -> None:
        self.container_id = container_id
        self.reason = reason
        super().__init__(f"Could not open stats stream for {container_id[:12]}: {reason}")
