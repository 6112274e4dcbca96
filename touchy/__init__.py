"""
Touchy - Update or create file timestamps.
"""

__version__ = "0.1.0"

# Package-level exports for convenience
from touchy.cli import main
from touchy.core.applier import TimestampApplier, TouchOutcome, TouchStatus
from touchy.core.config import FieldSelection, ParameterValidator, TouchConfig
from touchy.core.errors import (
    ConflictingStampSources,
    ErrorKind,
    FileUnavailable,
    MalformedOffset,
    MalformedTimestamp,
    ReferenceFileUnavailable,
    TimestampWriteFailed,
    TouchError,
)
from touchy.core.reference import ReferenceTimestampReader
from touchy.core.resolver import CurrentTime, ExplicitStamp, OffsetOnly, ReferenceStamps, TimestampResolver
from touchy.core.timestamp import PRESERVED, AbsoluteTimestamp, FileTimes, adjust_time
from touchy.core.toucher import Toucher, TouchReport
from touchy.utils.format import format_offset, format_timestamp, parse_offset, parse_timestamp


__all__ = [
    "AbsoluteTimestamp",
    "FileTimes",
    "PRESERVED",
    "adjust_time",
    "FieldSelection",
    "TouchConfig",
    "ParameterValidator",
    "ReferenceTimestampReader",
    "TimestampResolver",
    "ExplicitStamp",
    "ReferenceStamps",
    "CurrentTime",
    "OffsetOnly",
    "TimestampApplier",
    "TouchOutcome",
    "TouchStatus",
    "Toucher",
    "TouchReport",
    "ErrorKind",
    "TouchError",
    "MalformedTimestamp",
    "MalformedOffset",
    "ConflictingStampSources",
    "ReferenceFileUnavailable",
    "FileUnavailable",
    "TimestampWriteFailed",
    "parse_timestamp",
    "parse_offset",
    "format_timestamp",
    "format_offset",
    "main",
]
