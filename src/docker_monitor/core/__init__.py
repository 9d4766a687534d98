"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from docker_monitor.core.config import load_config
from docker_monitor.core.constants import SHORT_ID_LENGTH, TABLE_HEADERS
from docker_monitor.core.errors import (
    DockerConnectionError,
    InventoryError,
    MonitorError,
    StreamOpenError,
)
from docker_monitor.core.schemas import (
    BlkioEntry,
    ContainerIdentity,
    MetricRow,
    MonitorConfig,
    OutputFormat,
    StatSnapshot,
)

__all__ = [
    "SHORT_ID_LENGTH",
    "TABLE_HEADERS",
    "BlkioEntry",
    "ContainerIdentity",
    "DockerConnectionError",
    "InventoryError",
    "load_config",
    "MetricRow",
    "MonitorConfig",
    "MonitorError",
    "OutputFormat",
    "StatSnapshot",
    "StreamOpenError",
]
