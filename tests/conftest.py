"""Pytest configuration and fixtures for leaselock tests"""

import time
from pathlib import Path

import pytest

from leaselock import FilesystemStorage, Locker


class ClockStorage(FilesystemStorage):
    """Filesystem storage whose clock can be moved forward without sleeping"""

    def __init__(self):
        self.offset = 0.0

    def advance(self, seconds: float) -> None:
        self.offset += seconds

    def create_exclusive(self, path: Path) -> None:
        super().create_exclusive(path)
        self.set_modified_time(path, self.now())

    def now(self) -> float:
        return time.time() + self.offset


@pytest.fixture
def resource(tmp_path) -> Path:
    """A resource path inside a fresh temporary directory"""
    path = tmp_path / "data.csv"
    path.write_text("id,name\n", encoding="utf-8")
    return path


@pytest.fixture
def clock_storage() -> ClockStorage:
    return ClockStorage()


@pytest.fixture
def locker(clock_storage) -> Locker:
    """Locker with the default lease and a controllable clock"""
    return Locker(storage=clock_storage)


@pytest.fixture
def other_locker(clock_storage) -> Locker:
    """A second, independent Locker value sharing the same clock"""
    return Locker(storage=clock_storage)
