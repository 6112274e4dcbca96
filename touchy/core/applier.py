import errno
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from touchy.core.config import TIME_FIELDS, FieldSelection
from touchy.core.errors import ErrorKind, FileUnavailable, TimestampWriteFailed
from touchy.core.file_times import get_backend
from touchy.core.resolver import StampSource
from touchy.core.timestamp import PRESERVED
from touchy.utils.format import format_timestamp
from touchy.utils.logger import get_logger


# ============================================================================
# Outcomes
# ============================================================================


class TouchStatus(Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class TouchOutcome:
    """Result of touching one target path."""

    path: Path
    status: TouchStatus
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is not TouchStatus.FAILED

    def raise_for_status(self) -> None:
        """Raise the matching per-file error if this outcome failed."""
        if self.succeeded:
            return
        if self.error_kind is ErrorKind.WRITE_FAILED:
            raise TimestampWriteFailed(self.path, self.message)
        raise FileUnavailable(self.path, self.message)


# ============================================================================
# Timestamp Applier
# ============================================================================


class TimestampApplier:
    """Writes a resolved stamp source to the selected fields of target files."""

    def __init__(self, backend=None):
        """
        Initialize timestamp applier.

        Args:
            backend: Host timestamp backend. If None, picks the one for this host.
        """
        self.backend = backend or get_backend()
        self.logger = get_logger()

    def apply(
        self,
        path: Path,
        source: StampSource,
        fields: FieldSelection,
        create: bool = True,
        follow_symlinks: bool = True,
    ) -> TouchOutcome:
        """
        Apply a stamp source to one target path.

        Fields outside the selection are passed as PRESERVED in the same write
        call, so they are never altered. Failures never raise; they are
        returned as FAILED outcomes so the caller can move on to the next file.

        Args:
            path: Target path
            source: Resolved stamp source
            fields: Fields to modify
            create: Create the file as an empty regular file if it is missing
            follow_symlinks: Touch the target of a symlink instead of the link itself

        Returns:
            TouchOutcome for the path
        """
        if FieldSelection.CREATION in fields and not self.backend.supports_creation_write:
            error = OSError(errno.ENOTSUP, "Setting the creation time is not supported on this platform", str(path))
            return self._failed(path, ErrorKind.WRITE_FAILED, error)

        try:
            with self.backend.open(path, create, follow_symlinks) as handle:
                return self._write(handle, path, source, fields)
        except FileNotFoundError as e:
            if not create:
                self.logger.debug(f"Skipped missing file {path} (creation disabled)")
                return TouchOutcome(path, TouchStatus.SKIPPED)
            return self._failed(path, ErrorKind.FILE_UNAVAILABLE, e)
        except OSError as e:
            return self._failed(path, ErrorKind.FILE_UNAVAILABLE, e)

    def _write(self, handle, path: Path, source: StampSource, fields: FieldSelection) -> TouchOutcome:
        try:
            existing = handle.read() if source.reads_existing else None
            values = {
                field: source.value_for(field, existing) if field in fields else PRESERVED for field in TIME_FIELDS
            }
            handle.write(
                values[FieldSelection.CREATION],
                values[FieldSelection.LAST_ACCESS],
                values[FieldSelection.LAST_WRITE],
            )
        except (OSError, ValueError) as e:
            return self._failed(path, ErrorKind.WRITE_FAILED, e)

        written = ", ".join(
            f"{field.name.lower()}={format_timestamp(value)}"
            for field, value in values.items()
            if value is not PRESERVED
        )
        self.logger.debug(f"Touched {path}: {written}")
        return TouchOutcome(path, TouchStatus.APPLIED)

    def _failed(self, path: Path, kind: ErrorKind, error: Exception) -> TouchOutcome:
        message = getattr(error, "strerror", None) or str(error)
        self.logger.debug(f"Failed to touch {path} ({kind.value}): {message}")
        return TouchOutcome(path, TouchStatus.FAILED, kind, message)
