import errno
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from touchy.core.timestamp import PRESERVED, AbsoluteTimestamp, FieldValue, FileTimes


# ============================================================================
# Stat Helpers
# ============================================================================


def _creation_ns(st: os.stat_result) -> Optional[int]:
    """Creation time in nanoseconds, or None where the host does not expose it."""
    birth_ns = getattr(st, "st_birthtime_ns", None)
    if birth_ns is not None:
        return birth_ns
    birth = getattr(st, "st_birthtime", None)
    if birth is not None:
        return int(birth * 1_000_000_000)
    if os.name == "nt":
        # st_ctime is the creation time on Windows
        return st.st_ctime_ns
    return None


def file_times_from_stat(st: os.stat_result) -> FileTimes:
    """Convert a stat result to FileTimes."""
    creation_ns = _creation_ns(st)
    return FileTimes(
        creation=AbsoluteTimestamp.from_unix_ns(creation_ns) if creation_ns is not None else None,
        last_access=AbsoluteTimestamp.from_unix_ns(st.st_atime_ns),
        last_write=AbsoluteTimestamp.from_unix_ns(st.st_mtime_ns),
    )


def stat_file_times(path: Path) -> FileTimes:
    """Read the timestamps of a path with a plain stat (symlinks are followed)."""
    return file_times_from_stat(os.stat(path))


# ============================================================================
# POSIX Backend
# ============================================================================


class PosixFileTimes:
    """Timestamp access to a single path through stat and utime."""

    def __init__(self, path: Path, follow_symlinks: bool):
        self.path = path
        self.follow_symlinks = follow_symlinks

    def read(self) -> FileTimes:
        return file_times_from_stat(os.stat(self.path, follow_symlinks=self.follow_symlinks))

    def write(self, creation: FieldValue, last_access: FieldValue, last_write: FieldValue) -> None:
        """
        Write the given fields in one utime call.

        PRESERVED fields are written back with their current nanosecond value,
        so they stay bit-identical.

        Raises:
            OSError: If the host rejects the write, or creation time is requested
        """
        if creation is not PRESERVED:
            raise OSError(errno.ENOTSUP, "Setting the creation time is not supported on this platform", str(self.path))
        if last_access is PRESERVED and last_write is PRESERVED:
            return
        if not self.follow_symlinks and os.utime not in os.supports_follow_symlinks:
            raise OSError(
                errno.ENOTSUP, "Changing symbolic link timestamps is not supported on this platform", str(self.path)
            )

        current = None
        if last_access is PRESERVED or last_write is PRESERVED:
            current = os.stat(self.path, follow_symlinks=self.follow_symlinks)

        atime_ns = current.st_atime_ns if last_access is PRESERVED else last_access.to_unix_ns()
        mtime_ns = current.st_mtime_ns if last_write is PRESERVED else last_write.to_unix_ns()
        os.utime(self.path, ns=(atime_ns, mtime_ns), follow_symlinks=self.follow_symlinks)


class PosixTimesBackend:
    """Host timestamp access for POSIX systems."""

    supports_creation_write = False

    @contextmanager
    def open(self, path: Path, create: bool, follow_symlinks: bool) -> Iterator[PosixFileTimes]:
        """
        Prepare a path for a metadata write, creating an empty file if allowed.

        Raises:
            FileNotFoundError: If the path is missing and creation is not allowed
            OSError: If the file cannot be created
        """
        exists = os.path.exists(path) if follow_symlinks else os.path.lexists(path)
        if not exists:
            if not create:
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_NOCTTY | os.O_NONBLOCK, 0o666)
            os.close(fd)
        yield PosixFileTimes(path, follow_symlinks)


# ============================================================================
# Backend Selection
# ============================================================================


def get_backend():
    """Return the timestamp backend for the running host."""
    if os.name == "nt":
        from touchy.core.win32_times import Win32TimesBackend

        return Win32TimesBackend()
    return PosixTimesBackend()
