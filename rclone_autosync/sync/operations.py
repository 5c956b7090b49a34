"""Sync operations wrapper around the external sync tool."""

import logging
import subprocess
from typing import Optional

from ..config import SyncTarget, WatchSettings
from ..exceptions import SyncError

logger = logging.getLogger(__name__)


class SyncOperations:
    """Runs one-way syncs between the local directory and the remote.

    The tool inherits stdout and stderr so its progress is visible live.
    Its exit status is the only success signal; output is never parsed.
    """

    def __init__(self, target: SyncTarget, settings: Optional[WatchSettings] = None):
        """Initialize sync operations.

        Args:
            target: Remote/local pair to sync
            settings: Watch settings (tool command, subprocess isolation)
        """
        self.target = target
        self.settings = settings or WatchSettings()

    def build_command(self, source: str, destination: str) -> list[str]:
        """Build the sync tool command line.

        Args:
            source: Source location
            destination: Destination location

        Returns:
            Argument list for subprocess
        """
        return [
            self.settings.tool,
            "sync",
            source,
            destination,
            "--stats-log-level",
            "DEBUG",
            "-v",
        ]

    def sync(self, source: str, destination: str) -> None:
        """Run a blocking one-way sync from ``source`` to ``destination``.

        Args:
            source: Source location
            destination: Destination location

        Raises:
            SyncError: If the tool can't be launched or exits non-zero
        """
        cmd = self.build_command(source, destination)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                check=False,
                start_new_session=self.settings.isolate_subprocess,
            )
        except OSError as e:
            raise SyncError(f"{self.settings.tool}: {e}") from e

        if result.returncode != 0:
            raise SyncError(
                f"exit status {result.returncode}", returncode=result.returncode
            )

    def sync_down(self) -> None:
        """Mirror the remote into the local directory."""
        logger.info("Sync down")
        try:
            self.sync(self.target.remote_path, self.target.local_path)
        except SyncError as e:
            raise SyncError(f"sync down: {e}", returncode=e.returncode) from e

    def sync_up(self) -> None:
        """Mirror the local directory to the remote."""
        logger.info("Sync up")
        try:
            self.sync(self.target.local_path, self.target.remote_path)
        except SyncError as e:
            raise SyncError(f"sync up: {e}", returncode=e.returncode) from e
