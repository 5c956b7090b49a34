"""Custom exceptions for rclone-autosync."""

from typing import Optional


class AutosyncError(Exception):
    """Base exception for all rclone-autosync errors."""

    pass


class ArgumentError(AutosyncError):
    """Raised when the command line has the wrong number of arguments."""

    pass


class ConfigError(AutosyncError):
    """Raised when watch settings are invalid."""

    pass


class ListError(AutosyncError):
    """Raised when the local directory walk fails."""

    pass


class SyncError(AutosyncError):
    """Raised when the external sync tool fails to launch or exits non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        """Initialize sync error.

        Args:
            message: Error message
            returncode: Exit status of the sync tool, if it ran at all
        """
        super().__init__(message)
        self.returncode = returncode
