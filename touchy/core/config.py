from dataclasses import dataclass
from enum import Flag
from pathlib import Path
from typing import Optional, Tuple

from touchy.core.errors import ConflictingStampSources, MalformedOffset, MalformedTimestamp


# ============================================================================
# Field Selection
# ============================================================================


class FieldSelection(Flag):
    """Timestamp fields of a target file that a run may modify."""

    NONE = 0
    CREATION = 1
    LAST_ACCESS = 2
    LAST_WRITE = 4


# Creation time is never defaulted in; most hosts restrict rewriting it.
DEFAULT_FIELDS = FieldSelection.LAST_ACCESS | FieldSelection.LAST_WRITE

TIME_FIELDS: Tuple[FieldSelection, ...] = (
    FieldSelection.CREATION,
    FieldSelection.LAST_ACCESS,
    FieldSelection.LAST_WRITE,
)


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass(frozen=True)
class TouchConfig:
    """Configuration for one touch invocation, built once by the CLI layer."""

    fields: FieldSelection = FieldSelection.NONE
    stamp: Optional[str] = None
    reference: Optional[Path] = None
    offset: Optional[str] = None
    no_create: bool = False
    no_dereference: bool = False

    @property
    def effective_fields(self) -> FieldSelection:
        """Selected fields, defaulting to last access and last write."""
        return self.fields if self.fields else DEFAULT_FIELDS

    @property
    def create(self) -> bool:
        return not self.no_create

    @property
    def follow_symlinks(self) -> bool:
        return not self.no_dereference


# ============================================================================
# Parameter Validator
# ============================================================================


class ParameterValidator:
    """Validates touch parameters before any literal is parsed."""

    @staticmethod
    def validate(config: TouchConfig) -> None:
        """Validate all parameters in the configuration."""
        ParameterValidator.validate_offset_literal(config.offset)
        ParameterValidator.validate_stamp_sources(config.stamp, config.reference)
        ParameterValidator.validate_stamp_literal(config.stamp)

    @staticmethod
    def validate_offset_literal(offset: Optional[str]) -> None:
        """Validate that an offset literal, when given, is not empty."""
        if offset is not None and not offset:
            raise MalformedOffset("Adjustment offset is invalid.")

    @staticmethod
    def validate_stamp_sources(stamp: Optional[str], reference: Optional[Path]) -> None:
        """Validate that at most one absolute stamp source is given."""
        if stamp is not None and reference is not None:
            raise ConflictingStampSources("Cannot set timestamp from multiple sources.")

    @staticmethod
    def validate_stamp_literal(stamp: Optional[str]) -> None:
        """Validate that a stamp literal, when given, is not empty."""
        if stamp is not None and not stamp:
            raise MalformedTimestamp("Timestamp does not respect format.")
