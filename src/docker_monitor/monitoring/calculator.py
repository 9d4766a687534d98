"""Metric calculations on Docker stat snapshots.

All functions are pure: they read one snapshot (or a previous/current pair of
the same container) and return a number. Divisions guard against zero
divisors so a percentage is never NaN or infinite.
"""

from __future__ import annotations

from collections.abc import Sequence

from docker_monitor.core.constants import BLKIO_READ_OP, BLKIO_WRITE_OP, MEMORY_CACHE_KEY
from docker_monitor.core.schemas import BlkioEntry, ContainerIdentity, MetricRow, StatSnapshot
from docker_monitor.monitoring.io_utils import format_bytes


def calculate_cpu_percent(current: StatSnapshot, previous: StatSnapshot | None = None) -> float:
    """Calculate CPU utilization between two snapshots.

    Uses the same formula as `docker stats`:
    (cpu_delta / system_delta) * cores * 100.

    Args:
        current: Latest snapshot
        previous: Preceding snapshot of the same container; the zero
            baseline is used when omitted

    Returns:
        CPU percentage (may exceed 100 on multi-core hosts), 0.0 when the
        system delta is not positive or the container counter went backwards
    """
    if previous is None:
        previous = StatSnapshot.zero()

    cpu_delta = current.cpu_usage - previous.cpu_usage
    system_delta = current.system_cpu_usage - previous.system_cpu_usage

    if system_delta <= 0 or cpu_delta < 0:
        return 0.0
    return (cpu_delta / system_delta) * current.per_core_count * 100.0


def calculate_mem_usage(snapshot: StatSnapshot) -> int:
    """Memory usage in bytes excluding the page cache.

    Saturates at 0 when the reported cache exceeds usage.
    """
    cache = snapshot.memory_stats.get(MEMORY_CACHE_KEY, 0)
    return max(0, snapshot.memory_usage - cache)


def calculate_mem_limit(snapshot: StatSnapshot) -> int:
    return snapshot.memory_limit


def calculate_mem_percent(snapshot: StatSnapshot) -> float:
    """Memory usage as a percentage of the limit (0.0 without a limit)."""
    if snapshot.memory_limit <= 0:
        return 0.0
    return snapshot.memory_usage / snapshot.memory_limit * 100.0


def select_blkio_value(entries: Sequence[BlkioEntry], op: str) -> int:
    """Return the value of the first entry for the given operation.

    Operation names are compared case-insensitively since cgroup v1 reports
    "Read"/"Write" and cgroup v2 reports "read"/"write".

    Returns:
        Byte count of the first match, 0 if no entry matches
    """
    wanted = op.lower()
    for entry in entries:
        if entry.op.lower() == wanted:
            return entry.value
    return 0


def calculate_block_input(snapshot: StatSnapshot) -> int:
    return select_blkio_value(snapshot.blkio, BLKIO_READ_OP)


def calculate_block_output(snapshot: StatSnapshot) -> int:
    return select_blkio_value(snapshot.blkio, BLKIO_WRITE_OP)


def build_metric_row(
    identity: ContainerIdentity,
    current: StatSnapshot,
    previous: StatSnapshot | None = None,
) -> MetricRow:
    """Derive a display row from a snapshot pair of one container.

    Args:
        identity: Container the snapshots belong to
        current: Latest snapshot
        previous: Preceding snapshot (zero baseline when omitted)

    Returns:
        MetricRow with formatted byte values and numeric percentages
    """
    return MetricRow(
        container_id=identity.id,
        name=identity.name,
        cpu_percent=calculate_cpu_percent(current, previous),
        mem_usage=format_bytes(calculate_mem_usage(current)),
        mem_limit=format_bytes(calculate_mem_limit(current)),
        mem_percent=calculate_mem_percent(current),
        block_input=format_bytes(calculate_block_input(current)),
        block_output=format_bytes(calculate_block_output(current)),
        pids=current.pids,
    )
