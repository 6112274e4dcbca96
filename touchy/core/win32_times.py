"""
Handle-based timestamp access through the Windows API (kernel32 via ctypes).

Only imported on Windows hosts.
"""

import ctypes
from contextlib import contextmanager
from ctypes import wintypes
from pathlib import Path
from typing import Iterator

from touchy.core.timestamp import PRESERVED, AbsoluteTimestamp, FieldValue, FileTimes


# ============================================================================
# Win32 Constants
# ============================================================================

GENERIC_READ = 0x80000000
FILE_WRITE_ATTRIBUTES = 0x00000100
FILE_SHARE_READ = 0x00000001
OPEN_EXISTING = 3
OPEN_ALWAYS = 4
FILE_ATTRIBUTE_NORMAL = 0x00000080
FILE_FLAG_BACKUP_SEMANTICS = 0x02000000
FILE_FLAG_OPEN_REPARSE_POINT = 0x00200000
INVALID_HANDLE_VALUE = wintypes.HANDLE(-1).value

# SetFileTime leaves last access/last write untouched when handed this value
FILETIME_PRESERVED = 0xFFFF_FFFF_FFFF_FFFF


class FILETIME(ctypes.Structure):
    _fields_ = [("dwLowDateTime", wintypes.DWORD), ("dwHighDateTime", wintypes.DWORD)]

    @classmethod
    def from_ticks(cls, ticks: int) -> "FILETIME":
        return cls(ticks & 0xFFFFFFFF, (ticks >> 32) & 0xFFFFFFFF)

    def to_ticks(self) -> int:
        return (self.dwHighDateTime << 32) | self.dwLowDateTime


def _load_kernel32():
    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

    kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.LPVOID,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.HANDLE,
    ]
    kernel32.CreateFileW.restype = wintypes.HANDLE

    filetime_ptr = ctypes.POINTER(FILETIME)
    kernel32.GetFileTime.argtypes = [wintypes.HANDLE, filetime_ptr, filetime_ptr, filetime_ptr]
    kernel32.GetFileTime.restype = wintypes.BOOL
    kernel32.SetFileTime.argtypes = [wintypes.HANDLE, filetime_ptr, filetime_ptr, filetime_ptr]
    kernel32.SetFileTime.restype = wintypes.BOOL

    kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
    kernel32.CloseHandle.restype = wintypes.BOOL
    return kernel32


def _last_error(path: Path) -> OSError:
    """Build an OSError (mapped to its subclass, e.g. FileNotFoundError) from GetLastError."""
    error = ctypes.WinError(ctypes.get_last_error())
    error.filename = str(path)
    return error


# ============================================================================
# Win32 Backend
# ============================================================================


class Win32FileTimes:
    """Timestamp access through an open file handle."""

    def __init__(self, kernel32, handle: int, path: Path):
        self._kernel32 = kernel32
        self._handle = handle
        self.path = path

    def read(self) -> FileTimes:
        creation, last_access, last_write = FILETIME(), FILETIME(), FILETIME()
        if not self._kernel32.GetFileTime(
            self._handle, ctypes.byref(creation), ctypes.byref(last_access), ctypes.byref(last_write)
        ):
            raise _last_error(self.path)
        return FileTimes(
            creation=AbsoluteTimestamp(creation.to_ticks()),
            last_access=AbsoluteTimestamp(last_access.to_ticks()),
            last_write=AbsoluteTimestamp(last_write.to_ticks()),
        )

    def write(self, creation: FieldValue, last_access: FieldValue, last_write: FieldValue) -> None:
        """Write all three fields in one SetFileTime call; PRESERVED fields are left untouched."""
        # An unchanged creation time is passed as NULL
        creation_ft = None if creation is PRESERVED else FILETIME.from_ticks(creation.ticks)
        access_ft = FILETIME.from_ticks(FILETIME_PRESERVED if last_access is PRESERVED else last_access.ticks)
        write_ft = FILETIME.from_ticks(FILETIME_PRESERVED if last_write is PRESERVED else last_write.ticks)

        if not self._kernel32.SetFileTime(
            self._handle,
            ctypes.byref(creation_ft) if creation_ft is not None else None,
            ctypes.byref(access_ft),
            ctypes.byref(write_ft),
        ):
            raise _last_error(self.path)


class Win32TimesBackend:
    """Host timestamp access for Windows."""

    supports_creation_write = True

    def __init__(self):
        self._kernel32 = _load_kernel32()

    @contextmanager
    def open(self, path: Path, create: bool, follow_symlinks: bool) -> Iterator[Win32FileTimes]:
        """
        Open a handle for a metadata write, creating an empty file if allowed.

        The handle is closed on every exit path.

        Raises:
            FileNotFoundError: If the path is missing and creation is not allowed
            OSError: If the handle cannot be opened
        """
        flags = FILE_ATTRIBUTE_NORMAL | FILE_FLAG_BACKUP_SEMANTICS
        if not follow_symlinks:
            flags |= FILE_FLAG_OPEN_REPARSE_POINT

        handle = self._kernel32.CreateFileW(
            str(path),
            GENERIC_READ | FILE_WRITE_ATTRIBUTES,
            FILE_SHARE_READ,
            None,
            OPEN_ALWAYS if create else OPEN_EXISTING,
            flags,
            None,
        )
        if handle is None or handle == INVALID_HANDLE_VALUE:
            raise _last_error(path)

        try:
            yield Win32FileTimes(self._kernel32, handle, path)
        finally:
            self._kernel32.CloseHandle(handle)
