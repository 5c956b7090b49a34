"""rclone-autosync - keep a local directory and an rclone remote in sync."""

from .config import SyncTarget, WatchSettings
from .exceptions import (
    ArgumentError,
    AutosyncError,
    ConfigError,
    ListError,
    SyncError,
)
from .shutdown import ShutdownRequest
from .utils import format_duration, parse_duration

__version__ = "0.1.0"

__all__ = [
    "SyncTarget",
    "WatchSettings",
    "ShutdownRequest",
    "AutosyncError",
    "ArgumentError",
    "ConfigError",
    "ListError",
    "SyncError",
    "format_duration",
    "parse_duration",
]
