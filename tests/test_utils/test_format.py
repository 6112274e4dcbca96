"""
Tests for touchy.utils.format module.
"""

from datetime import datetime, timezone

import pytest

from touchy.core.errors import MalformedOffset, MalformedTimestamp
from touchy.core.timestamp import TICK_MASK, TICKS_PER_SECOND, AbsoluteTimestamp
from touchy.utils.format import format_offset, format_timestamp, parse_offset, parse_timestamp


def utc(*args) -> AbsoluteTimestamp:
    return AbsoluteTimestamp.from_datetime(datetime(*args, tzinfo=timezone.utc))


@pytest.mark.unit
class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_parse_full_utc_literal(self):
        """Test parsing yyyyMMddHHmmssZ."""
        assert parse_timestamp("20230115123045Z") == utc(2023, 1, 15, 12, 30, 45)

    def test_parse_without_seconds(self):
        """Test that seconds default to zero."""
        assert parse_timestamp("202301151230Z") == utc(2023, 1, 15, 12, 30, 0)

    def test_parse_single_digit_seconds(self):
        """Test that a trailing partial field is read as far as it goes."""
        assert parse_timestamp("2023011512307Z") == utc(2023, 1, 15, 12, 30, 7)

    def test_parse_single_digit_minute(self):
        """Test that one minute digit is enough for the mandatory minute field."""
        assert parse_timestamp("20230115123Z") == utc(2023, 1, 15, 12, 3, 0)

    def test_parse_missing_minute(self):
        """Test that year through hour alone is rejected."""
        with pytest.raises(MalformedTimestamp, match="Year through minute are required"):
            parse_timestamp("2023011512Z")

    def test_parse_ignores_digits_past_seconds(self):
        """Test that only the first 14 digits are read."""
        assert parse_timestamp("2023011512304599Z") == utc(2023, 1, 15, 12, 30, 45)

    @pytest.mark.parametrize(
        "literal,expected",
        [
            ("202313151230Z", (2023, 12, 15, 12, 30)),
            ("202300151230Z", (2023, 1, 15, 12, 30)),
            ("202301001230Z", (2023, 1, 1, 12, 30)),
            ("202301321230Z", (2023, 1, 31, 12, 30)),
            ("202301152530Z", (2023, 1, 15, 23, 30)),
            ("202301151275Z", (2023, 1, 15, 12, 59)),
            ("20230115123099Z", (2023, 1, 15, 12, 30, 59)),
            ("150001011200Z", (1601, 1, 1, 12, 0)),
        ],
    )
    def test_parse_clamps_out_of_range_fields(self, literal, expected):
        """Test that out-of-range fields are clamped to their bounds."""
        assert parse_timestamp(literal) == utc(*expected)

    def test_parse_rejects_day_missing_from_month(self):
        """Test that a day clamped to 31 in a 28-day month is rejected."""
        with pytest.raises(MalformedTimestamp, match="not a valid calendar date"):
            parse_timestamp("202302311200Z")

    @pytest.mark.parametrize(
        "literal",
        [
            "2023011512Z30",
            "202301151230ZZ",
            "Z",
            "",
            "2023-01-15 12:30",
            "202301151230z",
            "202301151230 ",
            "202301151230\n",
            "２０２３０１１５１２３０",
        ],
    )
    def test_parse_invalid_literals(self, literal):
        """Test that literals outside yyyyMMddHHmm[ss][Z] are rejected."""
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(literal)

    def test_parse_rejects_non_string(self):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(None)

    def test_malformed_timestamp_is_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("nope")

    def test_parse_local_time(self, fixed_timezone):
        """Test that a literal without Z is read as local wall-clock time."""
        assert parse_timestamp("202301151230") == utc(2023, 1, 15, 17, 30)

    def test_local_and_utc_differ_by_local_offset(self, fixed_timezone):
        """Test that appending Z shifts the result by the local UTC offset."""
        local = parse_timestamp("20230715083000")
        zulu = parse_timestamp("20230715083000Z")
        assert local.ticks - zulu.ticks == 5 * 3600 * TICKS_PER_SECOND

    def test_parse_local_time_at_end_of_year_range(self, fixed_timezone):
        """Test that a local time whose UTC equivalent falls past year 9999 is still accepted."""
        expected = utc(9999, 12, 31, 23, 59).ticks + 5 * 3600 * TICKS_PER_SECOND
        assert parse_timestamp("999912312359").ticks == expected

    def test_parse_clamps_every_field_to_its_maximum(self, fixed_timezone):
        expected = utc(9999, 12, 31, 23, 59, 59).ticks + 5 * 3600 * TICKS_PER_SECOND
        assert parse_timestamp("99999999999999").ticks == expected
        assert parse_timestamp("99999999999999Z") == utc(9999, 12, 31, 23, 59, 59)


@pytest.mark.unit
class TestParseOffset:
    """Tests for parse_offset function."""

    @pytest.mark.parametrize(
        "literal,expected",
        [
            ("-013000", -5400),
            ("0130", 5400),
            ("01", 3600),
            ("1", 3600),
            ("013", 3600 + 3 * 60),
            ("000001", 1),
            ("999999", 359999),
            ("-0", 0),
        ],
    )
    def test_parse_valid_offsets(self, literal, expected):
        """Test parsing of valid [-]HH[mm][ss] literals."""
        assert parse_offset(literal) == expected

    def test_parse_clamps_minutes_and_seconds(self):
        """Test that minutes and seconds are clamped to 59 while hours are not."""
        assert parse_offset("997599") == 99 * 3600 + 59 * 60 + 59

    @pytest.mark.parametrize("literal", ["1234567", "-1234567", "", "-", "+0130", "01a0", "0 30", "--01", "1.5"])
    def test_parse_invalid_offsets(self, literal):
        """Test that malformed offsets are rejected."""
        with pytest.raises(MalformedOffset):
            parse_offset(literal)

    def test_parse_too_many_digits_message(self):
        with pytest.raises(MalformedOffset, match="At most 6 digits"):
            parse_offset("1234567")

    def test_parse_rejects_non_string(self):
        with pytest.raises(MalformedOffset):
            parse_offset(130)


@pytest.mark.unit
class TestFormatting:
    """Tests for format_timestamp and format_offset functions."""

    def test_format_timestamp(self):
        stamp = AbsoluteTimestamp(utc(2023, 1, 15, 12, 30, 45).ticks + 1234567)
        assert format_timestamp(stamp) == "2023-01-15T12:30:45.1234567Z"

    def test_format_timestamp_out_of_calendar_range(self):
        """Test that wrapped tick values fall back to the raw count."""
        assert format_timestamp(AbsoluteTimestamp(TICK_MASK)) == f"ticks={TICK_MASK}"

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "+00:00:00"), (5400, "+01:30:00"), (-5400, "-01:30:00"), (359999, "+99:59:59")],
    )
    def test_format_offset(self, seconds, expected):
        assert format_offset(seconds) == expected
