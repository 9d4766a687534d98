"""docker-monitor - Live resource usage of running Docker containers."""

from __future__ import annotations

from docker_monitor.core.schemas import (
    ContainerIdentity,
    MetricRow,
    MonitorConfig,
    StatSnapshot,
)
from docker_monitor.orchestrator import CollectionOrchestrator, CycleResult

__version__ = "0.1.0"

__all__ = [
    "CollectionOrchestrator",
    "ContainerIdentity",
    "CycleResult",
    "MetricRow",
    "MonitorConfig",
    "StatSnapshot",
    "__version__",
]
