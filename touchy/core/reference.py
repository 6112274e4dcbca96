from pathlib import Path

from touchy.core.errors import ReferenceFileUnavailable
from touchy.core.file_times import stat_file_times
from touchy.core.timestamp import FileTimes
from touchy.utils.logger import get_logger


# ============================================================================
# Reference Timestamp Reader
# ============================================================================


class ReferenceTimestampReader:
    """Reads the timestamps of a reference file."""

    @staticmethod
    def read(path: Path) -> FileTimes:
        """
        Read creation, last access and last write times of a reference file.

        The path is queried with a plain stat, so a symlink resolves to its
        target regardless of the run's symlink policy.

        Args:
            path: Path to the reference file

        Returns:
            FileTimes of the reference file

        Raises:
            ReferenceFileUnavailable: If the file is missing, inaccessible or the query fails
        """
        try:
            times = stat_file_times(path)
        except OSError as e:
            raise ReferenceFileUnavailable(path, e.strerror or str(e)) from e
        except ValueError as e:
            raise ReferenceFileUnavailable(path, str(e)) from e

        get_logger().debug(f"Read reference timestamps from {path}: {times}")
        return times
