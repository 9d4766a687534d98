"""Monitoring module - Container stats collection pipeline.

Provides:
- calculator: Pure metric calculations on stat snapshots
- collector: Per-container stream decode loop
- sink: Thread-safe store of the latest row per container
- docker_source: Docker-backed inventory and metrics source

Shared utilities:
- io_utils: Byte formatting
"""

from __future__ import annotations

from docker_monitor.monitoring.base import CollectorOutcome, ContainerInventory, MetricsSource
from docker_monitor.monitoring.calculator import (
    build_metric_row,
    calculate_block_input,
    calculate_block_output,
    calculate_cpu_percent,
    calculate_mem_limit,
    calculate_mem_percent,
    calculate_mem_usage,
    select_blkio_value,
)
from docker_monitor.monitoring.collector import ContainerStatsCollector
from docker_monitor.monitoring.docker_source import (
    DockerInventory,
    DockerMetricsSource,
    connect_docker,
    parse_stats,
)
from docker_monitor.monitoring.io_utils import format_bytes
from docker_monitor.monitoring.sink import ResultSink

__all__ = [
    "build_metric_row",
    "calculate_block_input",
    "calculate_block_output",
    "calculate_cpu_percent",
    "calculate_mem_limit",
    "calculate_mem_percent",
    "calculate_mem_usage",
    "CollectorOutcome",
    "connect_docker",
    "ContainerInventory",
    "ContainerStatsCollector",
    "DockerInventory",
    "DockerMetricsSource",
    "format_bytes",
    "MetricsSource",
    "parse_stats",
    "ResultSink",
    "select_blkio_value",
]
