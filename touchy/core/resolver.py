from dataclasses import dataclass
from typing import Callable, Optional, Union

from touchy.core.config import FieldSelection, ParameterValidator, TouchConfig
from touchy.core.errors import ReferenceFileUnavailable
from touchy.core.reference import ReferenceTimestampReader
from touchy.core.timestamp import AbsoluteTimestamp, FileTimes
from touchy.utils.format import format_offset, format_timestamp, parse_offset, parse_timestamp
from touchy.utils.logger import get_logger


# ============================================================================
# Stamp Sources
# ============================================================================


@dataclass(frozen=True)
class ExplicitStamp:
    """A stamp given on the command line, already offset-adjusted."""

    stamp: AbsoluteTimestamp
    reads_existing = False

    def value_for(self, field: FieldSelection, existing: Optional[FileTimes] = None) -> AbsoluteTimestamp:
        return self.stamp


@dataclass(frozen=True)
class ReferenceStamps:
    """Timestamps copied from a reference file, each field already offset-adjusted."""

    times: FileTimes
    reads_existing = False

    def value_for(self, field: FieldSelection, existing: Optional[FileTimes] = None) -> AbsoluteTimestamp:
        value = self.times.get(field)
        if value is None:
            raise ValueError(f"Reference file has no {field.name.lower()} time")
        return value


@dataclass(frozen=True)
class CurrentTime:
    """The host time, read once per invocation."""

    stamp: AbsoluteTimestamp
    reads_existing = False

    def value_for(self, field: FieldSelection, existing: Optional[FileTimes] = None) -> AbsoluteTimestamp:
        return self.stamp


@dataclass(frozen=True)
class OffsetOnly:
    """No absolute stamp; each target's own existing fields are shifted by the offset."""

    offset: int
    reads_existing = True

    def value_for(self, field: FieldSelection, existing: Optional[FileTimes] = None) -> AbsoluteTimestamp:
        if existing is None:
            raise ValueError("Existing timestamps are required to apply an offset")
        value = existing.get(field)
        if value is None:
            raise ValueError(f"File has no {field.name.lower()} time to adjust")
        return value.shifted(self.offset)


StampSource = Union[ExplicitStamp, ReferenceStamps, CurrentTime, OffsetOnly]


# ============================================================================
# Timestamp Resolver
# ============================================================================


class TimestampResolver:
    """Resolves a configuration into the single stamp source used for every target."""

    def __init__(
        self,
        reader: Optional[ReferenceTimestampReader] = None,
        clock: Callable[[], AbsoluteTimestamp] = AbsoluteTimestamp.now,
    ):
        """
        Initialize timestamp resolver.

        Args:
            reader: Reference file reader. Defaults to ReferenceTimestampReader.
            clock: Source of the current host time
        """
        self.reader = reader or ReferenceTimestampReader()
        self.clock = clock
        self.logger = get_logger()

    def resolve(self, config: TouchConfig) -> StampSource:
        """
        Produce exactly one stamp source from the configuration.

        A reference file wins over everything else, then an explicit stamp,
        then a bare offset. With none of them the current time is read once
        so every target gets the same value.

        Args:
            config: Touch configuration

        Returns:
            The resolved StampSource

        Raises:
            MalformedOffset: If the offset literal is invalid
            ConflictingStampSources: If both a stamp and a reference file are given
            MalformedTimestamp: If the stamp literal is invalid
            ReferenceFileUnavailable: If the reference file cannot be read
        """
        ParameterValidator.validate(config)
        offset = parse_offset(config.offset) if config.offset is not None else None

        if config.reference is not None:
            source = self._resolve_reference(config, offset)
        elif config.stamp is not None:
            stamp = parse_timestamp(config.stamp)
            if offset is not None:
                stamp = stamp.shifted(offset)
            source = ExplicitStamp(stamp)
        elif offset is not None:
            source = OffsetOnly(offset)
        else:
            source = CurrentTime(self.clock())

        self.logger.debug(f"Resolved stamp source: {self.describe(source)}")
        return source

    def _resolve_reference(self, config: TouchConfig, offset: Optional[int]) -> ReferenceStamps:
        times = self.reader.read(config.reference)
        if FieldSelection.CREATION in config.effective_fields and times.creation is None:
            raise ReferenceFileUnavailable(config.reference, "creation time is not available on this platform")
        if offset is not None:
            times = times.shifted(offset)
        return ReferenceStamps(times)

    @staticmethod
    def describe(source: StampSource) -> str:
        """Human-readable summary of a stamp source for logs."""
        if isinstance(source, ExplicitStamp):
            return f"explicit {format_timestamp(source.stamp)}"
        if isinstance(source, CurrentTime):
            return f"now {format_timestamp(source.stamp)}"
        if isinstance(source, OffsetOnly):
            return f"offset {format_offset(source.offset)} from each file's own times"
        parts = [
            f"{name}={format_timestamp(value) if value is not None else 'n/a'}"
            for name, value in (
                ("creation", source.times.creation),
                ("last_access", source.times.last_access),
                ("last_write", source.times.last_write),
            )
        ]
        return "reference " + ", ".join(parts)
