"""Configuration for the watch loop.

Both classes are frozen: a sync target and its settings are fixed for the
lifetime of the process and handed explicitly to every component.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .exceptions import ArgumentError, ConfigError
from .utils import (
    DEFAULT_ERROR_RETRY_DELAY,
    DEFAULT_LOCAL_CHANGE_DEBOUNCE_DELAY,
    DEFAULT_LOCAL_CHECK_PERIOD,
    DEFAULT_REMOTE_CHECK_PERIOD,
    DEFAULT_TOOL,
)

USAGE = "usage: rclone-autosync remote_name:remote_path local_path"


@dataclass(frozen=True)
class SyncTarget:
    """The remote/local pair kept in sync."""

    remote_path: str
    """Tool-specific remote spec (e.g., "gdrive:backup/docs")"""

    local_path: str
    """Local directory mirrored to the remote"""

    @property
    def local_root(self) -> Path:
        """Local directory as a Path."""
        return Path(self.local_path)

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "SyncTarget":
        """Create a SyncTarget from positional command line arguments.

        Args:
            args: Positional arguments (remote spec, local path)

        Returns:
            SyncTarget instance

        Raises:
            ArgumentError: If there are not exactly two arguments
        """
        if len(args) != 2:
            raise ArgumentError("invalid number of arguments")
        return cls(remote_path=args[0], local_path=args[1])


@dataclass(frozen=True)
class WatchSettings:
    """Timing and tool settings for the watch loop."""

    tool: str = DEFAULT_TOOL
    """Sync tool executable"""

    error_retry_delay: float = DEFAULT_ERROR_RETRY_DELAY
    """Seconds to wait before starting a fresh run after an error"""

    remote_check_period: float = DEFAULT_REMOTE_CHECK_PERIOD
    """Seconds between unconditional downward syncs"""

    local_check_period: float = DEFAULT_LOCAL_CHECK_PERIOD
    """Seconds between local file system listings"""

    local_change_debounce_delay: float = DEFAULT_LOCAL_CHANGE_DEBOUNCE_DELAY
    """Seconds a local change must settle before syncing up"""

    isolate_subprocess: bool = True
    """Run the sync tool in its own session so terminal interrupts
    don't kill an in-flight sync"""

    def __post_init__(self) -> None:
        if not self.tool:
            raise ConfigError("Sync tool command must not be empty")
        if self.error_retry_delay < 0:
            raise ConfigError("Error retry delay must not be negative")
        if self.remote_check_period <= 0:
            raise ConfigError("Remote check period must be positive")
        if self.local_check_period <= 0:
            raise ConfigError("Local check period must be positive")
        if self.local_change_debounce_delay < 0:
            raise ConfigError("Local change debounce delay must not be negative")
