"""Docker-backed inventory and metrics source.

This module wraps the Docker SDK behind the ContainerInventory and
MetricsSource interfaces, and decodes the raw stats JSON returned by the
streaming /containers/{id}/stats endpoint into StatSnapshot objects.

Note: CPU deltas are computed by the collector from consecutive snapshots;
the precpu_stats block sent by the daemon is ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from datetime import datetime
from typing import TYPE_CHECKING, Any

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from docker_monitor.core.errors import DockerConnectionError, InventoryError, StreamOpenError
from docker_monitor.core.schemas import BlkioEntry, ContainerIdentity, MonitorConfig, StatSnapshot
from docker_monitor.monitoring.base import ContainerInventory, MetricsSource

if TYPE_CHECKING:
    import docker.models.containers

logger = logging.getLogger(__name__)

# Docker timestamps carry up to nine fraction digits; datetime holds six
_FRACTION_RE = re.compile(r"\.(\d+)")


def connect_docker(config: MonitorConfig) -> docker.DockerClient:
    """Create a Docker client and verify the daemon answers.

    Args:
        config: Monitor configuration (base URL and socket timeout)

    Returns:
        Connected DockerClient

    Raises:
        DockerConnectionError: If the daemon cannot be reached
    """
    try:
        if config.docker_base_url:
            client = docker.DockerClient(
                base_url=config.docker_base_url, timeout=config.client_timeout_seconds
            )
        else:
            client = docker.from_env(timeout=config.client_timeout_seconds)
        client.ping()
    except (DockerException, RequestException) as e:
        raise DockerConnectionError(f"Could not connect to Docker: {e}") from e

    logger.debug(f"Connected to Docker at {client.api.base_url}")
    return client


def _microseconds(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def _parse_read_time(value: str | None) -> datetime | None:
    """Parse the 'read' timestamp of a stats entry.

    Returns None for missing values and for the zero time Docker reports
    once a container has stopped.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(_FRACTION_RE.sub(_microseconds, value, count=1))
    except ValueError:
        logger.debug(f"Unparseable stats timestamp: {value}")
        return None
    if parsed.year <= 1:
        return None
    return parsed


def parse_stats(stats: dict[str, Any]) -> StatSnapshot:
    """Parse Docker stats JSON into a StatSnapshot.

    Handles both cgroup v1 (percpu_usage list) and cgroup v2 hosts, where
    percpu_usage is absent and online_cpus carries the core count.

    Args:
        stats: Raw stats dict from container.stats(decode=True)

    Returns:
        Validated snapshot

    Raises:
        pydantic.ValidationError: If counters are malformed
    """
    cpu_stats = stats.get("cpu_stats") or {}
    cpu_usage = cpu_stats.get("cpu_usage") or {}
    percpu_usage = cpu_usage.get("percpu_usage") or []
    per_core_count = len(percpu_usage) or cpu_stats.get("online_cpus") or 0

    memory_stats = stats.get("memory_stats") or {}
    blkio_stats = stats.get("blkio_stats") or {}
    io_bytes = blkio_stats.get("io_service_bytes_recursive") or []

    return StatSnapshot(
        cpu_usage=cpu_usage.get("total_usage", 0),
        system_cpu_usage=cpu_stats.get("system_cpu_usage", 0),
        per_core_count=per_core_count,
        memory_usage=memory_stats.get("usage", 0),
        memory_stats=memory_stats.get("stats") or {},
        memory_limit=memory_stats.get("limit", 0),
        blkio=tuple(BlkioEntry.model_validate(entry) for entry in io_bytes),
        pids=(stats.get("pids_stats") or {}).get("current", 0),
        read_at=_parse_read_time(stats.get("read")),
    )


class DockerInventory(ContainerInventory):
    """Lists running containers through the Docker API."""

    def __init__(self, client: docker.DockerClient) -> None:
        self._client = client

    def list_containers(self) -> list[ContainerIdentity]:
        try:
            containers = self._client.containers.list(ignore_removed=True)
        except (DockerException, RequestException) as e:
            raise InventoryError(f"Could not list containers: {e}") from e

        return [self._to_identity(c) for c in containers]

    @staticmethod
    def _to_identity(container: docker.models.containers.Container) -> ContainerIdentity:
        return ContainerIdentity(id=container.id, name=(container.name or "").lstrip("/"))


class DockerMetricsSource(MetricsSource):
    """Streams container stats from the Docker API.

    Example:
        ```python
        client = connect_docker(MonitorConfig())
        source = DockerMetricsSource(client)
        for snapshot in source.open_stream(container_id):
            print(snapshot.memory_usage)
        ```
    """

    def __init__(self, client: docker.DockerClient) -> None:
        self._client = client

    def open_stream(self, container_id: str) -> Iterator[StatSnapshot]:
        try:
            container = self._client.containers.get(container_id)
            raw_stream = container.stats(stream=True, decode=True)
        except (DockerException, RequestException) as e:
            raise StreamOpenError(container_id, str(e)) from e

        logger.debug(f"Opened stats stream for {container_id[:12]}")
        return self._decode(raw_stream)

    @staticmethod
    def _decode(raw_stream: Iterator[dict[str, Any]]) -> Iterator[StatSnapshot]:
        try:
            for stats in raw_stream:
                yield parse_stats(stats)
        finally:
            close = getattr(raw_stream, "close", None)
            if callable(close):
                close()
