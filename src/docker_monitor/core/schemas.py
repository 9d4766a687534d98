"""Pydantic schemas for docker-monitor.

This module defines all data contracts used throughout the monitor,
including the raw stat snapshots decoded from the Docker stats stream,
container identities, the derived display rows and the runtime configuration.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from docker_monitor.core.constants import SHORT_ID_LENGTH


class OutputFormat(str, Enum):
    """Supported output formats for the stats table."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


class BlkioEntry(BaseModel):
    """One entry of blkio_stats.io_service_bytes_recursive."""

    op: str = Field(..., description="Operation kind, e.g. 'Read' or 'Write'")
    value: int = Field(default=0, ge=0, description="Cumulative bytes for this operation")
    major: int = Field(default=0, ge=0)
    minor: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class StatSnapshot(BaseModel):
    """Immutable reading of a container's resource counters at one instant.

    CPU counters are cumulative nanoseconds, so a rate needs two snapshots
    of the same container. Memory and PID values are point-in-time.

    Attributes:
        cpu_usage: Cumulative CPU time consumed by the container
        system_cpu_usage: Cumulative CPU time of the whole host
        per_core_count: Number of CPU cores the container can use
        memory_usage: Current memory usage in bytes (includes page cache)
        memory_stats: Detailed memory counters, e.g. {"cache": ...}
        memory_limit: Memory limit in bytes (0 when unknown)
        blkio: Ordered block I/O entries
        pids: Current number of processes/threads
        read_at: Time the runtime took the reading, if reported
    """

    cpu_usage: int = Field(default=0, ge=0)
    system_cpu_usage: int = Field(default=0, ge=0)
    per_core_count: int = Field(default=0, ge=0)
    memory_usage: int = Field(default=0, ge=0)
    memory_stats: dict[str, int] = Field(default_factory=dict)
    memory_limit: int = Field(default=0, ge=0)
    blkio: tuple[BlkioEntry, ...] = Field(default=())
    pids: int = Field(default=0, ge=0)
    read_at: datetime | None = Field(default=None)

    model_config = {"frozen": True}

    @classmethod
    def zero(cls) -> StatSnapshot:
        """Return the all-zero baseline snapshot."""
        return cls()


class ContainerIdentity(BaseModel):
    """Running container as reported by the inventory."""

    id: str = Field(..., min_length=1, description="Full container ID")
    name: str = Field(default="", description="Display name without leading slash")

    model_config = {"frozen": True}

    @property
    def short_id(self) -> str:
        """Return the 12-character short ID."""
        return self.id[:SHORT_ID_LENGTH]


class MetricRow(BaseModel):
    """One display row derived from a snapshot pair.

    Percentages stay numeric; byte values are already formatted.
    """

    container_id: str = Field(..., description="Short container ID")
    name: str
    cpu_percent: float = Field(ge=0)
    mem_usage: str
    mem_limit: str
    mem_percent: float = Field(ge=0)
    block_input: str
    block_output: str
    pids: int = Field(ge=0)

    model_config = {"frozen": True}

    @field_validator("container_id")
    @classmethod
    def truncate_container_id(cls, v: str) -> str:
        """Keep only the short form of the container ID."""
        return v[:SHORT_ID_LENGTH]

    def to_display_dict(self) -> dict[str, str]:
        """Convert to the string columns shown in the stats table."""
        return {
            "CONTAINER ID": self.container_id,
            "NAME": self.name,
            "CPU %": f"{self.cpu_percent:.2f}%",
            "MEM USAGE / LIMIT": f"{self.mem_usage} / {self.mem_limit}",
            "MEM %": f"{self.mem_percent:.2f}%",
            "BLOCK I/O": f"{self.block_input} / {self.block_output}",
            "PIDS": str(self.pids),
        }


class MonitorConfig(BaseModel):
    """Top-level monitor configuration.

    Loaded from YAML/JSON files; CLI flags override individual fields.
    """

    docker_base_url: str | None = Field(
        default=None, description="Docker daemon URL. None = use DOCKER_HOST / environment"
    )
    client_timeout_seconds: int = Field(
        default=30, ge=1, le=600, description="Socket timeout of the Docker client"
    )
    read_timeout_seconds: float = Field(
        default=5.0, gt=0, le=300, description="Max wait for each snapshot of a stream"
    )
    samples_per_cycle: int = Field(
        default=2, ge=1, le=100, description="Snapshots decoded per container per cycle"
    )
    max_workers: int = Field(default=16, ge=1, le=256, description="Concurrent collectors")
    emit_first_sample: bool = Field(
        default=False, description="Publish a row for the first snapshot (zero baseline)"
    )
    refresh_interval_seconds: float = Field(
        default=2.0, ge=0.1, le=3600, description="Delay between cycles in watch mode"
    )
    watch: bool = Field(default=False, description="Keep refreshing instead of exiting")
    output_format: OutputFormat = Field(default=OutputFormat.TABLE)

    @model_validator(mode="after")
    def check_samples_per_cycle(self) -> MonitorConfig:
        """A suppressed first sample needs a second one to produce any row."""
        if self.samples_per_cycle < 2 and not self.emit_first_sample:
            raise ValueError("samples_per_cycle must be at least 2 unless emit_first_sample is set")
        return self
