"""
Point-in-time values at file-time resolution.

An ``AbsoluteTimestamp`` counts 100-nanosecond ticks from 1601-01-01 UTC, the
native file-time representation of the Windows API. POSIX nanosecond values
are converted at the platform boundary.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from touchy.core.config import FieldSelection


# ============================================================================
# Constants
# ============================================================================

TICKS_PER_SECOND = 10_000_000
NS_PER_TICK = 100
TICK_MASK = 0xFFFF_FFFF_FFFF_FFFF

# Ticks between 1601-01-01 and 1970-01-01
UNIX_EPOCH_TICKS = 116_444_736_000_000_000

FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Absolute Timestamp
# ============================================================================


@dataclass(frozen=True, order=True)
class AbsoluteTimestamp:
    """Unsigned 64-bit tick count from the file-time epoch."""

    ticks: int

    def __post_init__(self):
        if not (0 <= self.ticks <= TICK_MASK):
            raise ValueError(f"ticks must fit in an unsigned 64-bit integer, got {self.ticks}")

    @classmethod
    def from_unix_ns(cls, unix_ns: int) -> "AbsoluteTimestamp":
        """Build from nanoseconds since 1970-01-01 UTC, truncating to tick resolution."""
        return cls(unix_ns // NS_PER_TICK + UNIX_EPOCH_TICKS)

    @classmethod
    def from_datetime(cls, value: datetime) -> "AbsoluteTimestamp":
        """Build from a timezone-aware datetime (raises ValueError before 1601)."""
        if value.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        delta = value - FILETIME_EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds * TICKS_PER_SECOND + delta.microseconds * 10)

    @classmethod
    def now(cls) -> "AbsoluteTimestamp":
        """Current host time."""
        return cls.from_unix_ns(time.time_ns())

    def to_unix_ns(self) -> int:
        return (self.ticks - UNIX_EPOCH_TICKS) * NS_PER_TICK

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime (raises OverflowError past year 9999)."""
        return FILETIME_EPOCH + timedelta(microseconds=self.ticks // 10)

    def shifted(self, offset_seconds: int) -> "AbsoluteTimestamp":
        return adjust_time(self, offset_seconds)


def adjust_time(stamp: AbsoluteTimestamp, offset_seconds: int) -> AbsoluteTimestamp:
    """
    Add a signed number of seconds to a timestamp.

    The arithmetic wraps like an unsigned 64-bit register; no overflow check
    is made, so offsets pushing a value past either end of the range wrap
    around.

    Args:
        stamp: Timestamp to adjust (left untouched)
        offset_seconds: Seconds to add; negative moves time backward

    Returns:
        A new AbsoluteTimestamp
    """
    return AbsoluteTimestamp((stamp.ticks + offset_seconds * TICKS_PER_SECOND) & TICK_MASK)


# ============================================================================
# Preserved Marker
# ============================================================================


class Preserved(Enum):
    """Marker for a field that a timestamp write must leave unchanged."""

    PRESERVED = "preserved"

    def __repr__(self) -> str:
        return "PRESERVED"


PRESERVED = Preserved.PRESERVED

FieldValue = Union[AbsoluteTimestamp, Preserved]


# ============================================================================
# File Times
# ============================================================================


@dataclass(frozen=True)
class FileTimes:
    """The three timestamp fields of a file. Creation is None where the host does not expose it."""

    creation: Optional[AbsoluteTimestamp]
    last_access: AbsoluteTimestamp
    last_write: AbsoluteTimestamp

    def get(self, field: FieldSelection) -> Optional[AbsoluteTimestamp]:
        if field is FieldSelection.CREATION:
            return self.creation
        if field is FieldSelection.LAST_ACCESS:
            return self.last_access
        if field is FieldSelection.LAST_WRITE:
            return self.last_write
        raise ValueError(f"Not a single timestamp field: {field!r}")

    def shifted(self, offset_seconds: int) -> "FileTimes":
        """Apply the same offset to every present field independently."""
        return FileTimes(
            creation=self.creation.shifted(offset_seconds) if self.creation is not None else None,
            last_access=self.last_access.shifted(offset_seconds),
            last_write=self.last_write.shifted(offset_seconds),
        )
