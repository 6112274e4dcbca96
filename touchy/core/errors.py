from enum import Enum


# ============================================================================
# Error Kinds
# ============================================================================


class ErrorKind(Enum):
    """Kinds of failure reported by the timestamp engine."""

    MALFORMED_TIMESTAMP = "malformed_timestamp"
    MALFORMED_OFFSET = "malformed_offset"
    CONFLICTING_STAMP_SOURCES = "conflicting_stamp_sources"
    REFERENCE_FILE_UNAVAILABLE = "reference_file_unavailable"
    FILE_UNAVAILABLE = "file_unavailable"
    WRITE_FAILED = "write_failed"


# ============================================================================
# Exceptions
# ============================================================================


class TouchError(Exception):
    """Base class for all errors raised by touchy."""

    kind: ErrorKind


class MalformedTimestamp(TouchError, ValueError):
    """Raised when a -t literal does not follow yyyyMMddHHmm[ss][Z]."""

    kind = ErrorKind.MALFORMED_TIMESTAMP


class MalformedOffset(TouchError, ValueError):
    """Raised when an -A literal does not follow [-]HH[mm][ss]."""

    kind = ErrorKind.MALFORMED_OFFSET


class ConflictingStampSources(TouchError, ValueError):
    """Raised when both an explicit stamp and a reference file are given."""

    kind = ErrorKind.CONFLICTING_STAMP_SOURCES


class ReferenceFileUnavailable(TouchError):
    """Raised when the reference file's timestamps cannot be read."""

    kind = ErrorKind.REFERENCE_FILE_UNAVAILABLE

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Reference timestamp could not be set from '{path}' - {reason}")


class FileUnavailable(TouchError):
    """Raised when a target file cannot be opened for a metadata write."""

    kind = ErrorKind.FILE_UNAVAILABLE

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not open '{path}' - {reason}")


class TimestampWriteFailed(TouchError):
    """Raised when the host rejects a timestamp write on an opened file."""

    kind = ErrorKind.WRITE_FAILED

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not set timestamps of '{path}' - {reason}")
