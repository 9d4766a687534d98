"""Tests for metric calculations."""

import math

import pytest
from fakes import make_snapshot

from docker_monitor.core.schemas import BlkioEntry, ContainerIdentity, StatSnapshot
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


class TestCpuPercent:
    """Tests for calculate_cpu_percent."""

    def test_delta_formula(self):
        """Test (cpu_delta / system_delta) * cores * 100."""
        previous = make_snapshot(cpu_usage=900_000_000, system_cpu_usage=9_000_000_000)
        current = make_snapshot(cpu_usage=1_000_000_000, system_cpu_usage=10_000_000_000)

        # 0.1s of 1s system time on 2 cores = 20%
        assert calculate_cpu_percent(current, previous) == pytest.approx(20.0)

    @pytest.mark.parametrize(
        ("cpu_delta", "system_delta", "cores"),
        [(1, 1, 1), (250, 1000, 4), (0, 5000, 8), (123_456, 7_890_123, 16)],
    )
    def test_matches_formula_and_non_negative(self, cpu_delta, system_delta, cores):
        """Test the formula holds for positive system deltas."""
        previous = make_snapshot(cpu_usage=1000, system_cpu_usage=10_000, per_core_count=cores)
        current = make_snapshot(
            cpu_usage=1000 + cpu_delta,
            system_cpu_usage=10_000 + system_delta,
            per_core_count=cores,
        )

        result = calculate_cpu_percent(current, previous)

        assert result == pytest.approx(cpu_delta / system_delta * cores * 100)
        assert result >= 0

    def test_zero_system_delta_returns_zero(self):
        """Test a zero system delta yields exactly 0 instead of NaN/Inf."""
        previous = make_snapshot(cpu_usage=100, system_cpu_usage=5000)
        current = make_snapshot(cpu_usage=200, system_cpu_usage=5000)

        result = calculate_cpu_percent(current, previous)

        assert result == 0.0
        assert math.isfinite(result)

    def test_identical_snapshots(self):
        """Test identical snapshots give 0%."""
        snapshot = make_snapshot(cpu_usage=100, system_cpu_usage=5000)
        assert calculate_cpu_percent(snapshot, snapshot) == 0.0

    def test_counter_reset_returns_zero(self):
        """Test a CPU counter that went backwards is not reported as negative."""
        previous = make_snapshot(cpu_usage=5000, system_cpu_usage=10_000)
        current = make_snapshot(cpu_usage=100, system_cpu_usage=20_000)

        assert calculate_cpu_percent(current, previous) == 0.0

    def test_missing_previous_uses_zero_baseline(self):
        """Test the first reading is computed against an all-zero snapshot."""
        current = make_snapshot(cpu_usage=500, system_cpu_usage=10_000, per_core_count=4)

        assert calculate_cpu_percent(current) == pytest.approx(500 / 10_000 * 4 * 100)
        assert calculate_cpu_percent(current, StatSnapshot.zero()) == calculate_cpu_percent(current)


class TestMemory:
    """Tests for memory calculations."""

    def test_usage_subtracts_cache(self):
        """Test page cache is excluded from usage."""
        snapshot = make_snapshot(memory_usage=300, cache=100)
        assert calculate_mem_usage(snapshot) == 200

    def test_usage_without_cache_key(self):
        """Test a missing cache key counts as 0."""
        snapshot = make_snapshot(memory_usage=300)
        assert calculate_mem_usage(snapshot) == 300

    def test_usage_saturates_at_zero(self):
        """Test cache larger than usage does not underflow."""
        snapshot = make_snapshot(memory_usage=100, cache=500)
        assert calculate_mem_usage(snapshot) == 0

    def test_limit_passthrough(self):
        """Test the limit is returned unchanged."""
        snapshot = make_snapshot(memory_limit=4096)
        assert calculate_mem_limit(snapshot) == 4096

    def test_percent(self):
        """Test usage / limit * 100 (cache not subtracted)."""
        snapshot = make_snapshot(memory_usage=256, cache=128, memory_limit=1024)
        assert calculate_mem_percent(snapshot) == pytest.approx(25.0)

    def test_percent_zero_limit(self):
        """Test a zero limit yields 0 instead of raising."""
        snapshot = make_snapshot(memory_usage=256, memory_limit=0)
        assert calculate_mem_percent(snapshot) == 0.0


class TestBlockIO:
    """Tests for block I/O selection."""

    def test_first_matching_entry_wins(self):
        """Test only the first Read entry is used (no summing)."""
        entries = [
            BlkioEntry(op="Read", value=10, major=8, minor=0),
            BlkioEntry(op="Write", value=20, major=8, minor=0),
            BlkioEntry(op="Read", value=30, major=8, minor=16),
        ]
        assert select_blkio_value(entries, "Read") == 10
        assert select_blkio_value(entries, "Write") == 20

    def test_no_match_returns_zero(self):
        """Test 0 is returned when no entry matches."""
        entries = [BlkioEntry(op="Sync", value=99), BlkioEntry(op="Total", value=99)]
        assert select_blkio_value(entries, "Read") == 0
        assert select_blkio_value([], "Write") == 0

    def test_lowercase_ops_match(self):
        """Test cgroup v2 lowercase op names are matched."""
        entries = [BlkioEntry(op="read", value=7), BlkioEntry(op="write", value=9)]
        assert select_blkio_value(entries, "Read") == 7
        assert select_blkio_value(entries, "Write") == 9

    def test_snapshot_helpers(self):
        """Test calculate_block_input/output read from the snapshot."""
        snapshot = make_snapshot(blkio_read=4096, blkio_write=2048)
        assert calculate_block_input(snapshot) == 4096
        assert calculate_block_output(snapshot) == 2048


class TestBuildMetricRow:
    """Tests for build_metric_row."""

    def test_row_fields(self):
        """Test a row is derived from the pair and formatted."""
        identity = ContainerIdentity(id="0123456789abcdef" * 4, name="web")
        previous = make_snapshot(cpu_usage=0, system_cpu_usage=1000)
        current = make_snapshot(
            cpu_usage=250,
            system_cpu_usage=2000,
            per_core_count=2,
            memory_usage=2 * 1024 * 1024,
            cache=1024 * 1024,
            memory_limit=8 * 1024 * 1024,
            blkio_read=1024,
            blkio_write=1023,
            pids=7,
        )

        row = build_metric_row(identity, current, previous)

        assert row.container_id == "0123456789ab"
        assert row.name == "web"
        assert row.cpu_percent == pytest.approx(50.0)
        assert row.mem_usage == "1.0 MB"
        assert row.mem_limit == "8.0 MB"
        assert row.mem_percent == pytest.approx(25.0)
        assert row.block_input == "1.0 KB"
        assert row.block_output == "1023 B"
        assert row.pids == 7
