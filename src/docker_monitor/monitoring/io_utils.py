"""Byte formatting helpers for the stats table.

Functions:
    format_bytes: Render a byte count as a scaled, human-readable string
"""

from __future__ import annotations

from docker_monitor.core.constants import BYTE_UNIT, BYTE_UNIT_PREFIXES


def format_bytes(byte_count: int) -> str:
    """Format a byte count using binary (1024-based) units.

    Values below 1024 are shown as a bare integer ("1023 B"); larger values
    use one decimal place and the largest unit not exceeding the input
    ("1.0 KB", "1.5 MB", ...). Exabytes is the largest unit.

    Args:
        byte_count: Non-negative number of bytes

    Returns:
        Formatted string, e.g. "12.3 MB"

    Raises:
        ValueError: If byte_count is negative
    """
    if byte_count < 0:
        raise ValueError(f"byte_count must be non-negative, got {byte_count}")
    if byte_count < BYTE_UNIT:
        return f"{byte_count} B"

    div, exp = BYTE_UNIT, 0
    n = byte_count // BYTE_UNIT
    while n >= BYTE_UNIT and exp < len(BYTE_UNIT_PREFIXES) - 1:
        div *= BYTE_UNIT
        exp += 1
        n //= BYTE_UNIT
    return f"{byte_count / div:.1f} {BYTE_UNIT_PREFIXES[exp]}B"
