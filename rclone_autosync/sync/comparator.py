"""Snapshot comparison and debounce logic for local change detection."""

import logging
from enum import Enum
from typing import Optional

from .scanner import FileRecord, Snapshot

logger = logging.getLogger(__name__)


class ChangeDecision(str, Enum):
    """Outcome of observing a new local snapshot."""

    FIRST_SNAPSHOT = "first_snapshot"
    """No previous snapshot to compare against"""

    UNCHANGED = "unchanged"
    """Tree matches the previous snapshot, nothing pending"""

    CHANGE_DETECTED = "change_detected"
    """First difference since the tree last settled"""

    CHANGE_PENDING = "change_pending"
    """Change seen earlier, debounce window still open"""

    SETTLED = "settled"
    """Tree stopped changing for the debounce delay, sync up now"""


def is_same_file(a: FileRecord, b: FileRecord) -> bool:
    """Check whether two records match on name, size, mode and mtime."""
    return (
        a.name == b.name
        and a.size == b.size
        and a.mode == b.mode
        and a.mtime_ns == b.mtime_ns
    )


def same_files(a: Snapshot, b: Snapshot) -> bool:
    """Compare two snapshots entry by entry in list order.

    Snapshots holding the same records in a different order are
    considered different.

    Args:
        a: First snapshot
        b: Second snapshot

    Returns:
        True if both snapshots have the same length and pairwise equal records
    """
    if len(a) != len(b):
        return False
    return all(is_same_file(x, y) for x, y in zip(a, b))


def first_difference(a: Snapshot, b: Snapshot) -> Optional[str]:
    """Return the relative path of the first differing entry, if any.

    Args:
        a: Previous snapshot
        b: New snapshot

    Returns:
        Relative path of the first mismatch, or None if the snapshots match
    """
    for x, y in zip(a, b):
        if not is_same_file(x, y):
            return y.relative_path or y.name
    if len(a) > len(b):
        return a[len(b)].relative_path or a[len(b)].name
    if len(b) > len(a):
        return b[len(a)].relative_path or b[len(a)].name
    return None


class DebounceState:
    """Tracks when the most recent local change was observed."""

    def __init__(self) -> None:
        self.changed_at: Optional[float] = None

    @property
    def running(self) -> bool:
        """Whether a change is waiting to settle."""
        return self.changed_at is not None

    def arm(self, now: float) -> None:
        """Start or restart the debounce window at ``now``."""
        self.changed_at = now

    def clear(self) -> None:
        self.changed_at = None

    def expired(self, now: float, delay: float) -> bool:
        """Check whether ``delay`` seconds have passed since the last change."""
        return self.changed_at is not None and now - self.changed_at >= delay


class ChangeDetector:
    """Compares successive local snapshots and debounces changes.

    The debounce window is rearmed on every tick that sees a difference,
    so an upward sync only fires once the tree has been stable for the
    full delay.

    Examples:
        >>> detector = ChangeDetector(debounce_delay=5.0)
        >>> detector.observe(snapshot, now=1.0)
        <ChangeDecision.FIRST_SNAPSHOT: 'first_snapshot'>
    """

    def __init__(self, debounce_delay: float):
        """Initialize change detector.

        Args:
            debounce_delay: Seconds the tree must stay unchanged after the
                last detected change before it counts as settled
        """
        self.debounce_delay = debounce_delay
        self.snapshot: Optional[Snapshot] = None
        self.debounce = DebounceState()

    def observe(self, snapshot: Snapshot, now: float) -> ChangeDecision:
        """Compare a new snapshot with the stored one and update state.

        The new snapshot always replaces the stored one.

        Args:
            snapshot: Freshly listed snapshot
            now: Tick time of the listing

        Returns:
            ChangeDecision for this tick
        """
        previous = self.snapshot
        self.snapshot = snapshot

        if previous is None:
            return ChangeDecision.FIRST_SNAPSHOT

        if not same_files(previous, snapshot):
            logger.debug("Local difference at %s", first_difference(previous, snapshot))
            if self.debounce.running:
                self.debounce.arm(now)
                return ChangeDecision.CHANGE_PENDING
            self.debounce.arm(now)
            return ChangeDecision.CHANGE_DETECTED

        if not self.debounce.running:
            return ChangeDecision.UNCHANGED
        if self.debounce.expired(now, self.debounce_delay):
            return ChangeDecision.SETTLED
        return ChangeDecision.CHANGE_PENDING

    def clear(self) -> None:
        """Stop the debounce window after a successful upward sync."""
        self.debounce.clear()
