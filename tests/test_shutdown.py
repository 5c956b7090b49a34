"""Tests for shutdown request handling."""

import signal

import pytest

from rclone_autosync.shutdown import ShutdownRequest


class TestShutdownRequest:
    """Tests for ShutdownRequest."""

    def test_initially_not_set(self):
        """A new request is not set."""
        assert ShutdownRequest().is_set() is False

    def test_set(self):
        """Setting the request is visible to waiters."""
        request = ShutdownRequest()
        request.set()

        assert request.is_set() is True
        assert request.wait(0) is True

    def test_wait_times_out(self):
        """Waiting without a request returns False after the timeout."""
        assert ShutdownRequest().wait(0.01) is False

    def test_first_signal_sets_request(self):
        """The first signal requests shutdown."""
        request = ShutdownRequest()

        request.handle_signal(signal.SIGINT, None)

        assert request.is_set() is True

    def test_second_signal_aborts(self):
        """A second signal raises KeyboardInterrupt."""
        request = ShutdownRequest()
        request.handle_signal(signal.SIGINT, None)

        with pytest.raises(KeyboardInterrupt):
            request.handle_signal(signal.SIGINT, None)

    def test_install_routes_and_restores(self):
        """Handlers are installed inside the block and restored after it."""
        request = ShutdownRequest()
        before = signal.getsignal(signal.SIGINT)

        with request.install([signal.SIGINT]) as installed:
            assert installed is request
            assert signal.getsignal(signal.SIGINT) == request.handle_signal

        assert signal.getsignal(signal.SIGINT) == before

    def test_install_restores_on_error(self):
        """Handlers are restored when the block raises."""
        request = ShutdownRequest()
        before = signal.getsignal(signal.SIGINT)

        with pytest.raises(RuntimeError):
            with request.install([signal.SIGINT]):
                raise RuntimeError("boom")

        assert signal.getsignal(signal.SIGINT) == before

    def test_raised_signal_sets_request(self):
        """A real SIGINT delivered inside the block requests shutdown."""
        request = ShutdownRequest()

        with request.install([signal.SIGINT]):
            signal.raise_signal(signal.SIGINT)

        assert request.is_set() is True
