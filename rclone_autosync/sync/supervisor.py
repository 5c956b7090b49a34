"""Top-level retry loop around the sync scheduler."""

import logging
from typing import Callable, Optional

from ..config import WatchSettings
from ..exceptions import AutosyncError
from ..shutdown import ShutdownRequest
from ..utils import format_duration
from .scheduler import SyncScheduler

logger = logging.getLogger(__name__)


class Supervisor:
    """Restarts the scheduler after every failed run.

    A failed run is logged, followed by a fixed delay, then a brand new
    run (full down/up reconciliation). There is no backoff and no retry
    limit. When shutdown is requested the remaining work is one final
    sync up; only a failure of that sync ends the loop with an error.
    """

    def __init__(
        self,
        scheduler: SyncScheduler,
        settings: WatchSettings,
        shutdown: ShutdownRequest,
        retry_wait: Optional[Callable[[float], bool]] = None,
    ):
        """Initialize supervisor.

        Args:
            scheduler: Scheduler executing one run per call
            settings: Watch settings (error retry delay)
            shutdown: Shutdown request shared with the scheduler
            retry_wait: Called with the retry delay in seconds; returns True
                if shutdown was requested while waiting (defaults to
                shutdown.wait)
        """
        self.scheduler = scheduler
        self.settings = settings
        self.shutdown = shutdown
        self.retry_wait = retry_wait or shutdown.wait
        self.attempts = 0

    def run_forever(self) -> None:
        """Run the scheduler until it terminates cleanly.

        Raises:
            AutosyncError: If the final sync up after a shutdown request fails
        """
        while True:
            self.attempts += 1
            try:
                self.scheduler.run()
                break
            except AutosyncError as e:
                if self.scheduler.final_sync_attempted:
                    raise
                logger.error("error: %s", e)

            if self.shutdown.is_set():
                self.scheduler.finish()
                break

            logger.debug(
                "Retrying in %s (attempt %d failed)",
                format_duration(self.settings.error_retry_delay),
                self.attempts,
            )
            if self.retry_wait(self.settings.error_retry_delay):
                self.scheduler.finish()
                break

        logger.info("Done")
