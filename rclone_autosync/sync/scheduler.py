"""Watch loop that decides when to sync up and when to sync down."""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from ..config import WatchSettings
from ..shutdown import ShutdownRequest
from .comparator import ChangeDecision, ChangeDetector
from .operations import SyncOperations
from .scanner import DirectoryScanner, Snapshot

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    """States of a single run."""

    IDLE = "idle"
    SYNCING_DOWN = "syncing_down"
    SYNCING_UP = "syncing_up"
    WATCHING = "watching"
    TERMINATED = "terminated"


class Clock(Protocol):
    """Time source and interruptible wait used by the watch loop."""

    def now(self) -> float: ...

    def wait(self, shutdown: ShutdownRequest, timeout: float) -> bool: ...


class MonotonicClock:
    """Clock backed by time.monotonic and the shutdown event."""

    def now(self) -> float:
        return time.monotonic()

    def wait(self, shutdown: ShutdownRequest, timeout: float) -> bool:
        return shutdown.wait(timeout)


class Ticker:
    """Fixed-period deadline.

    Ticks missed while the loop was busy are coalesced into one.
    """

    def __init__(self, name: str, period: float, start: float):
        self.name = name
        self.period = period
        self.next_at = start + period

    def due(self, now: float) -> bool:
        return now >= self.next_at

    def consume(self, now: float) -> float:
        """Take the pending tick and schedule the next one after ``now``.

        Returns:
            Scheduled time of the tick being consumed
        """
        tick_time = self.next_at
        self.next_at += self.period
        if self.next_at <= now:
            skipped = int((now - self.next_at) // self.period) + 1
            self.next_at += skipped * self.period
            logger.debug("%s ticker skipped %d tick(s)", self.name, skipped)
        return tick_time


class SyncScheduler:
    """Runs the initial reconciliation and then the watch loop.

    One run syncs down, syncs up, then waits on three sources: the
    local-check ticker, the remote-check ticker and the shutdown request.
    Exactly one of them is handled per wake-up and syncs block the loop,
    so ticks never overlap with a sync in flight.

    Any SyncError or ListError ends the run and propagates to the caller.
    Every call to run() starts from scratch (no snapshot, no debounce,
    new tickers).
    """

    def __init__(
        self,
        operations: SyncOperations,
        local_root: Path,
        settings: WatchSettings,
        shutdown: ShutdownRequest,
        lister: Optional[Callable[[Path], Snapshot]] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize sync scheduler.

        Args:
            operations: Sync operations for both directions
            local_root: Local directory to watch
            settings: Watch timing settings
            shutdown: Shutdown request polled by the loop
            lister: Snapshot lister (defaults to DirectoryScanner().scan)
            clock: Time source (defaults to MonotonicClock)
        """
        self.operations = operations
        self.local_root = Path(local_root)
        self.settings = settings
        self.shutdown = shutdown
        self.lister = lister or DirectoryScanner().scan
        self.clock = clock or MonotonicClock()
        self.state = SchedulerState.IDLE
        self.final_sync_attempted = False

    def run(self) -> None:
        """Execute one full run until shutdown or the first error.

        Raises:
            SyncError: If a sync in either direction fails
            ListError: If the local directory can't be listed
        """
        self.final_sync_attempted = False
        try:
            self._sync_down()
            self._sync_up()
            self._watch()
        finally:
            if self.state != SchedulerState.TERMINATED:
                self.state = SchedulerState.IDLE

    def _watch(self) -> None:
        start = self.clock.now()
        local_ticker = Ticker("local", self.settings.local_check_period, start)
        remote_ticker = Ticker("remote", self.settings.remote_check_period, start)
        detector = ChangeDetector(self.settings.local_change_debounce_delay)

        self.state = SchedulerState.WATCHING
        logger.info("Watch file system")

        while True:
            if self.shutdown.is_set():
                self.finish()
                return

            now = self.clock.now()
            ticker = min(local_ticker, remote_ticker, key=lambda t: t.next_at)
            if not ticker.due(now):
                self.clock.wait(self.shutdown, ticker.next_at - now)
                continue

            tick_time = ticker.consume(now)
            if ticker is local_ticker:
                self._check_local(detector, tick_time)
            else:
                self._sync_down()
            self.state = SchedulerState.WATCHING

    def finish(self) -> None:
        """Handle a shutdown request with one final sync up.

        Sets ``final_sync_attempted`` so a caller can tell a failure of
        this sync apart from a failure earlier in the run.

        Raises:
            SyncError: If the final sync up fails
        """
        logger.info("Interrupt intercepted")
        self.final_sync_attempted = True
        self._sync_up()
        self.state = SchedulerState.TERMINATED

    def _check_local(self, detector: ChangeDetector, tick_time: float) -> None:
        snapshot = self.lister(self.local_root)
        decision = detector.observe(snapshot, tick_time)

        if decision == ChangeDecision.CHANGE_DETECTED:
            logger.info("Local change detected")
        elif decision == ChangeDecision.SETTLED:
            self._sync_up()
            detector.clear()

    def _sync_down(self) -> None:
        self.state = SchedulerState.SYNCING_DOWN
        self.operations.sync_down()

    def _sync_up(self) -> None:
        self.state = SchedulerState.SYNCING_UP
        self.operations.sync_up()
