"""
Shared pytest fixtures and configuration.
"""

import shutil
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path

import pytest

from touchy.core.timestamp import AbsoluteTimestamp, FileTimes
from touchy.utils.logger import get_logger
from test_utils.mocks import FakeBackend


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture(autouse=True)
def reset_logger():
    """Detach logger handlers so no test writes to another test's captured stream."""
    yield
    get_logger().close()


@pytest.fixture
def fixed_timezone(monkeypatch):
    """Pin local time to UTC-5 with no daylight saving."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "EST+05")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def sample_stamp():
    """2023-01-15 12:30:45 UTC."""
    return AbsoluteTimestamp.from_datetime(datetime(2023, 1, 15, 12, 30, 45, tzinfo=timezone.utc))


@pytest.fixture
def sample_times():
    """Distinct creation, last access and last write times."""
    return FileTimes(
        creation=AbsoluteTimestamp.from_datetime(datetime(2020, 5, 1, 8, 0, tzinfo=timezone.utc)),
        last_access=AbsoluteTimestamp.from_datetime(datetime(2021, 6, 2, 9, 15, tzinfo=timezone.utc)),
        last_write=AbsoluteTimestamp.from_datetime(datetime(2022, 7, 3, 10, 30, tzinfo=timezone.utc)),
    )


@pytest.fixture
def fake_backend():
    """In-memory timestamp backend that can write creation time."""
    return FakeBackend()
