"""Tests for the byte formatter."""

import pytest

from docker_monitor.monitoring.io_utils import format_bytes

UNIT_RANK = {"B": 0, "KB": 1, "MB": 2, "GB": 3, "TB": 4, "PB": 5, "EB": 6}


class TestFormatBytes:
    """Tests for format_bytes."""

    @pytest.mark.parametrize(
        ("byte_count", "expected"),
        [
            (0, "0 B"),
            (1, "1 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1.0 MB"),
            (1024**3, "1.0 GB"),
            (1024**4, "1.0 TB"),
            (1024**5, "1.0 PB"),
            (1024**6, "1.0 EB"),
        ],
    )
    def test_unit_boundaries(self, byte_count, expected):
        """Test exact output at unit boundaries."""
        assert format_bytes(byte_count) == expected

    def test_just_below_next_unit_stays_in_lower_unit(self):
        """Test a value just under 1 MB is still shown in KB."""
        assert format_bytes(1024 * 1024 - 1) == "1024.0 KB"

    def test_exabytes_is_largest_unit(self):
        """Test values beyond the EB range keep the EB unit."""
        assert format_bytes(1024**7) == "1024.0 EB"
        assert format_bytes(2**64 - 1) == "16.0 EB"

    def test_negative_rejected(self):
        """Test negative byte counts raise ValueError."""
        with pytest.raises(ValueError):
            format_bytes(-1)

    def test_unit_rank_is_monotonic(self):
        """Test larger inputs never map to a smaller displayed unit."""
        values = sorted(
            {0, 1, 512}
            | {1024**exp + delta for exp in range(1, 7) for delta in (-1, 0, 1)}
            | {3 * 1024**exp for exp in range(1, 7)}
        )
        ranks = [UNIT_RANK[format_bytes(v).split(" ")[1]] for v in values]
        assert ranks == sorted(ranks)
