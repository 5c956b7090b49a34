"""Shared fixtures for rclone-autosync tests."""

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import Mock

import pytest

from rclone_autosync.config import WatchSettings
from rclone_autosync.shutdown import ShutdownRequest
from rclone_autosync.sync.operations import SyncOperations
from rclone_autosync.sync.scanner import FileRecord, Snapshot


def make_record(
    name: str = "a.txt", size: int = 100, mode: int = 0o100644, mtime_ns: int = 1000
) -> FileRecord:
    """Create a FileRecord for testing."""
    return FileRecord(
        name=name, size=size, mode=mode, mtime_ns=mtime_ns, relative_path=name
    )


class FakeClock:
    """Deterministic clock: waiting advances time instantly.

    Shutdown is requested once time reaches ``stop_at``.
    """

    def __init__(self, start: float = 0.0, stop_at: Optional[float] = None):
        self.current = start
        self.stop_at = stop_at
        self.waits: list[float] = []

    def now(self) -> float:
        return self.current

    def wait(self, shutdown: ShutdownRequest, timeout: float) -> bool:
        if shutdown.is_set():
            return True
        self.waits.append(timeout)
        self.current += timeout
        if self.stop_at is not None and self.current >= self.stop_at:
            shutdown.set()
        return shutdown.is_set()


class ScriptedLister:
    """Snapshot lister whose result depends on the fake clock's time.

    ``timeline`` maps a change time to the snapshot that is current from
    that time on.
    """

    def __init__(self, clock: FakeClock, timeline: dict[float, Snapshot]):
        self.clock = clock
        self.timeline = sorted(timeline.items())
        self.calls: list[float] = []

    def __call__(self, root: Path) -> Snapshot:
        self.calls.append(self.clock.now())
        current: Snapshot = []
        for changed_at, snapshot in self.timeline:
            if changed_at <= self.clock.now():
                current = snapshot
        return list(current)


@pytest.fixture
def settings():
    """Create watch settings with the default timings."""
    return WatchSettings()


@pytest.fixture
def shutdown():
    """Create a fresh shutdown request."""
    return ShutdownRequest()


@pytest.fixture
def mock_operations():
    """Create mock sync operations."""
    return Mock(spec=SyncOperations)


@pytest.fixture
def clock_factory() -> Callable[..., FakeClock]:
    """Provide a factory for fake clocks."""
    return FakeClock


@pytest.fixture
def lister_factory() -> Callable[..., ScriptedLister]:
    """Provide a factory for scripted snapshot listers."""
    return ScriptedLister


@pytest.fixture
def record_factory() -> Callable[..., FileRecord]:
    """Provide a factory for FileRecords."""
    return make_record
