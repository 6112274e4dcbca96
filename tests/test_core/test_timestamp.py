"""
Tests for touchy.core.timestamp module.
"""

from datetime import datetime, timedelta, timezone

import pytest

from touchy.core.config import FieldSelection
from touchy.core.timestamp import (
    PRESERVED,
    TICK_MASK,
    TICKS_PER_SECOND,
    UNIX_EPOCH_TICKS,
    AbsoluteTimestamp,
    FileTimes,
    adjust_time,
)


@pytest.mark.unit
class TestAbsoluteTimestamp:
    """Tests for AbsoluteTimestamp conversions."""

    def test_unix_epoch(self):
        assert AbsoluteTimestamp.from_unix_ns(0).ticks == UNIX_EPOCH_TICKS

    def test_unix_ns_round_trip_at_tick_resolution(self):
        stamp = AbsoluteTimestamp.from_unix_ns(1_600_000_000_123_456_700)
        assert stamp.to_unix_ns() == 1_600_000_000_123_456_700

    def test_unix_ns_truncates_below_tick_resolution(self):
        """Test that sub-100ns precision is dropped."""
        assert AbsoluteTimestamp.from_unix_ns(199).ticks == UNIX_EPOCH_TICKS + 1

    def test_from_datetime_matches_unix_conversion(self):
        value = datetime(2023, 1, 15, 12, 30, 45, 123456, tzinfo=timezone.utc)
        expected_ns = int(value.timestamp()) * 1_000_000_000 + 123456 * 1000
        assert AbsoluteTimestamp.from_datetime(value) == AbsoluteTimestamp.from_unix_ns(expected_ns)

    def test_from_datetime_converts_other_zones(self):
        plus_two = timezone(timedelta(hours=2))
        assert AbsoluteTimestamp.from_datetime(
            datetime(2023, 1, 15, 14, 0, tzinfo=plus_two)
        ) == AbsoluteTimestamp.from_datetime(datetime(2023, 1, 15, 12, 0, tzinfo=timezone.utc))

    def test_from_datetime_requires_timezone(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            AbsoluteTimestamp.from_datetime(datetime(2023, 1, 15))

    def test_from_datetime_before_epoch(self):
        with pytest.raises(ValueError, match="unsigned 64-bit"):
            AbsoluteTimestamp.from_datetime(datetime(1600, 12, 31, tzinfo=timezone.utc))

    def test_to_datetime(self):
        value = datetime(2023, 1, 15, 12, 30, 45, 500000, tzinfo=timezone.utc)
        assert AbsoluteTimestamp.from_datetime(value).to_datetime() == value

    @pytest.mark.parametrize("ticks", [-1, TICK_MASK + 1])
    def test_rejects_ticks_outside_64_bits(self, ticks):
        with pytest.raises(ValueError):
            AbsoluteTimestamp(ticks)

    def test_now_is_current(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=5)
        after = datetime.now(timezone.utc) + timedelta(seconds=5)
        now = AbsoluteTimestamp.now()
        assert AbsoluteTimestamp.from_datetime(before) < now < AbsoluteTimestamp.from_datetime(after)

    def test_immutable(self):
        stamp = AbsoluteTimestamp(1)
        with pytest.raises(AttributeError):
            stamp.ticks = 2


@pytest.mark.unit
class TestAdjustTime:
    """Tests for adjust_time function."""

    def test_forward(self):
        stamp = AbsoluteTimestamp(UNIX_EPOCH_TICKS)
        assert adjust_time(stamp, 3600).ticks == UNIX_EPOCH_TICKS + 3600 * TICKS_PER_SECOND

    def test_backward(self):
        stamp = AbsoluteTimestamp(UNIX_EPOCH_TICKS)
        assert adjust_time(stamp, -5400).ticks == UNIX_EPOCH_TICKS - 5400 * TICKS_PER_SECOND

    def test_returns_copy(self):
        stamp = AbsoluteTimestamp(UNIX_EPOCH_TICKS)
        adjust_time(stamp, 60)
        assert stamp.ticks == UNIX_EPOCH_TICKS

    def test_shifted_matches_adjust_time(self):
        stamp = AbsoluteTimestamp(UNIX_EPOCH_TICKS)
        assert stamp.shifted(-1) == adjust_time(stamp, -1)

    def test_wraps_below_zero(self):
        """Test that 64-bit arithmetic wraps instead of raising."""
        assert adjust_time(AbsoluteTimestamp(0), -1).ticks == TICK_MASK - TICKS_PER_SECOND + 1

    def test_wraps_above_maximum(self):
        assert adjust_time(AbsoluteTimestamp(TICK_MASK), 1).ticks == TICKS_PER_SECOND - 1


@pytest.mark.unit
class TestPreservedAndFileTimes:
    """Tests for the PRESERVED marker and FileTimes."""

    def test_preserved_is_not_a_timestamp(self):
        assert PRESERVED != AbsoluteTimestamp(TICK_MASK)
        assert not isinstance(PRESERVED, AbsoluteTimestamp)
        assert repr(PRESERVED) == "PRESERVED"

    def test_get_fields(self, sample_times):
        assert sample_times.get(FieldSelection.CREATION) == sample_times.creation
        assert sample_times.get(FieldSelection.LAST_ACCESS) == sample_times.last_access
        assert sample_times.get(FieldSelection.LAST_WRITE) == sample_times.last_write

    def test_get_rejects_combined_selection(self, sample_times):
        with pytest.raises(ValueError):
            sample_times.get(FieldSelection.LAST_ACCESS | FieldSelection.LAST_WRITE)

    def test_shifted_moves_every_field(self, sample_times):
        shifted = sample_times.shifted(60)
        assert shifted.creation == sample_times.creation.shifted(60)
        assert shifted.last_access == sample_times.last_access.shifted(60)
        assert shifted.last_write == sample_times.last_write.shifted(60)

    def test_shifted_keeps_missing_creation(self, sample_times):
        times = FileTimes(None, sample_times.last_access, sample_times.last_write)
        assert times.shifted(60).creation is None
