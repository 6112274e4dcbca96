"""
Test data and file fixtures.
"""

import os
from pathlib import Path


# 2020-09-13 12:26:40.123456700 UTC, a whole number of 100 ns ticks
BASE_NS = 1_600_000_000_123_456_700


def create_file_with_times(directory: Path, name: str, atime_ns: int, mtime_ns: int, content: bytes = b"") -> Path:
    """Create a file and set its access and modification times in nanoseconds."""
    path = directory / name
    path.write_bytes(content)
    os.utime(path, ns=(atime_ns, mtime_ns))
    return path


def read_times_ns(path: Path, follow_symlinks: bool = True):
    """Return (st_atime_ns, st_mtime_ns) of a path."""
    st = os.stat(path, follow_symlinks=follow_symlinks)
    return st.st_atime_ns, st.st_mtime_ns
