"""Shared constants for docker-monitor.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

# Docker short IDs are the first 12 hex characters of the full container ID
SHORT_ID_LENGTH = 12

# Binary unit used by the byte formatter (KiB, MiB, ... displayed as KB, MB, ...)
BYTE_UNIT = 1024
BYTE_UNIT_PREFIXES = "KMGTPE"

# Memory stat key subtracted from usage to exclude the page cache
MEMORY_CACHE_KEY = "cache"

# Block I/O operation kinds in io_service_bytes_recursive
BLKIO_READ_OP = "Read"
BLKIO_WRITE_OP = "Write"

# Column headers of the stats table, in display order
TABLE_HEADERS = (
    "CONTAINER ID",
    "NAME",
    "CPU %",
    "MEM USAGE / LIMIT",
    "MEM %",
    "BLOCK I/O",
    "PIDS",
)
