# ============================================================================
# Parsing and Formatting Functions
# ============================================================================

import re
import time
from datetime import datetime, timezone
from typing import List

from touchy.core.errors import MalformedOffset, MalformedTimestamp
from touchy.core.timestamp import TICKS_PER_SECOND, AbsoluteTimestamp


# (width, minimum, maximum) for year, month, day, hour, minute, second
TIMESTAMP_FIELDS = (
    (4, 1601, 30827),
    (2, 1, 12),
    (2, 1, 31),
    (2, 0, 23),
    (2, 0, 59),
    (2, 0, 59),
)
REQUIRED_TIMESTAMP_FIELDS = 5
MAX_OFFSET_DIGITS = 6

_DIGITS_RE = re.compile(r"[0-9]+")


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(value, maximum))


def _is_digits(text: str) -> bool:
    return bool(_DIGITS_RE.fullmatch(text))


def _split_digits(digits: str, widths) -> List[int]:
    """Cut a digit run into fixed-width fields; the last field may be short."""
    values = []
    pos = 0
    for width in widths:
        chunk = digits[pos : pos + width]
        if not chunk:
            break
        values.append(int(chunk))
        pos += width
    return values


def parse_timestamp(stamp_str: str) -> AbsoluteTimestamp:
    """
    Parse a timestamp literal to an AbsoluteTimestamp.

    Supports formats like:
    - "202301151230" (yyyyMMddHHmm, local time, seconds default to 0)
    - "20230115123045" (yyyyMMddHHmmss, local time)
    - "20230115123045Z" (trailing Z, interpreted as UTC)

    Only the first 14 digits are read. Each field is clamped into its valid
    range instead of being rejected (month 13 becomes 12, minute 75 becomes
    59). A day that does not exist in its month (February 31) is rejected.

    Args:
        stamp_str: Timestamp string to parse

    Returns:
        Parsed AbsoluteTimestamp

    Raises:
        MalformedTimestamp: If the literal does not follow yyyyMMddHHmm[ss][Z]
    """
    if not stamp_str or not isinstance(stamp_str, str):
        raise MalformedTimestamp(f"Invalid timestamp string: {stamp_str!r}")

    digits = stamp_str
    utc = False
    zulu = stamp_str.find("Z")
    if zulu != -1:
        if zulu != len(stamp_str) - 1:
            raise MalformedTimestamp(f"Timestamp does not respect format: {stamp_str}. 'Z' must be the last character")
        utc = True
        digits = stamp_str[:-1]

    if not _is_digits(digits):
        raise MalformedTimestamp(
            f"Timestamp does not respect format: {stamp_str}. Expected format 'yyyyMMddHHmm[ss][Z]'"
        )

    values = _split_digits(digits, [width for width, _, _ in TIMESTAMP_FIELDS])
    if len(values) < REQUIRED_TIMESTAMP_FIELDS:
        raise MalformedTimestamp(f"Timestamp does not respect format: {stamp_str}. Year through minute are required")

    values += [0] * (len(TIMESTAMP_FIELDS) - len(values))
    year, month, day, hour, minute, second = (
        _clamp(value, minimum, maximum) for value, (_, minimum, maximum) in zip(values, TIMESTAMP_FIELDS)
    )

    try:
        wall_clock = datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        raise MalformedTimestamp(f"Timestamp is not a valid calendar date: {stamp_str} ({e})") from e

    try:
        if utc:
            return AbsoluteTimestamp.from_datetime(wall_clock.replace(tzinfo=timezone.utc))
        # mktime resolves local wall-clock time without passing through a UTC datetime
        unix_seconds = int(time.mktime(wall_clock.timetuple()))
        return AbsoluteTimestamp.from_unix_ns(unix_seconds * 1_000_000_000)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedTimestamp(f"Timestamp cannot be represented on this host: {stamp_str} ({e})") from e


def parse_offset(offset_str: str) -> int:
    """
    Parse a relative offset literal to a signed number of seconds.

    Supports formats like:
    - "01" (1 hour)
    - "0130" (1 hour 30 minutes)
    - "-013000" (1 hour 30 minutes backward)

    The hour is mandatory; minutes and seconds default to 0 and are clamped
    to 59.

    Args:
        offset_str: Offset string to parse

    Returns:
        Offset in seconds, negative to move time backward

    Raises:
        MalformedOffset: If the literal does not follow [-]HH[mm][ss]
    """
    if not isinstance(offset_str, str):
        raise MalformedOffset(f"Invalid offset string: {offset_str!r}")

    negative = offset_str.startswith("-")
    digits = offset_str[1:] if negative else offset_str

    if len(digits) > MAX_OFFSET_DIGITS:
        raise MalformedOffset(f"Adjustment offset is invalid: {offset_str}. At most {MAX_OFFSET_DIGITS} digits allowed")
    if not _is_digits(digits):
        raise MalformedOffset(f"Adjustment offset is invalid: {offset_str}. Expected format '[-]HH[mm][ss]'")

    hours, minutes, seconds = (_split_digits(digits, (2, 2, 2)) + [0, 0])[:3]
    offset = hours * 3600 + _clamp(minutes, 0, 59) * 60 + _clamp(seconds, 0, 59)

    return -offset if negative else offset


def format_timestamp(stamp: AbsoluteTimestamp) -> str:
    """Format a timestamp as ISO-8601 UTC with tick precision."""
    try:
        value = stamp.to_datetime()
    except OverflowError:
        return f"ticks={stamp.ticks}"
    return f"{value:%Y-%m-%dT%H:%M:%S}.{stamp.ticks % TICKS_PER_SECOND:07d}Z"


def format_offset(offset_seconds: int) -> str:
    """Format a signed second count as [+-]HH:MM:SS."""
    sign = "-" if offset_seconds < 0 else "+"
    hours, remainder = divmod(abs(offset_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
