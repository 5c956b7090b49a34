"""Watch loop for rclone-autosync - change detection and sync scheduling."""

from .comparator import (
    ChangeDecision,
    ChangeDetector,
    DebounceState,
    first_difference,
    is_same_file,
    same_files,
)
from .operations import SyncOperations
from .scanner import DirectoryScanner, FileRecord, Snapshot
from .scheduler import Clock, MonotonicClock, SchedulerState, SyncScheduler, Ticker
from .supervisor import Supervisor

__all__ = [
    "SyncScheduler",
    "SchedulerState",
    "Supervisor",
    "SyncOperations",
    "DirectoryScanner",
    "FileRecord",
    "Snapshot",
    "ChangeDetector",
    "ChangeDecision",
    "DebounceState",
    "same_files",
    "is_same_file",
    "first_difference",
    "Clock",
    "MonotonicClock",
    "Ticker",
]
