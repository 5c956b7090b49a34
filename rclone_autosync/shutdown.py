"""Graceful shutdown handling.

The watch loop never looks at OS signals directly. It polls a
ShutdownRequest, which the CLI wires to SIGINT and SIGTERM.
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownRequest:
    """Cancellation token shared by the supervisor and the scheduler."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def is_set(self) -> bool:
        """Whether shutdown has been requested."""
        return self._event.is_set()

    def set(self) -> None:
        """Request shutdown."""
        self._event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until shutdown is requested or ``timeout`` elapses.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True if shutdown has been requested
        """
        return self._event.wait(timeout)

    def handle_signal(self, signum: int, frame: Any) -> None:
        """Signal handler: first signal requests shutdown, the next one aborts."""
        if self._event.is_set():
            raise KeyboardInterrupt
        logger.debug("Received signal %d, shutting down after current step", signum)
        self._event.set()

    @contextmanager
    def install(self, signals: Sequence[int] = DEFAULT_SIGNALS) -> Iterator["ShutdownRequest"]:
        """Route ``signals`` to this request for the duration of the block.

        Previous handlers are restored on exit.

        Args:
            signals: Signal numbers to intercept

        Yields:
            This ShutdownRequest
        """
        previous = {}
        try:
            for signum in signals:
                previous[signum] = signal.signal(signum, self.handle_signal)
            yield self
        finally:
            for signum, handler in previous.items():
                # None means the handler wasn't installed from Python
                signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
