"""
Cancellation tokens for API operations.
"""
import threading
import time
from typing import Optional

from ztcentral.network.errors import CancelledError


class CancellationToken:
    """
    Thread-safe cancellation signal with an optional deadline.

    A token is cancelled either explicitly through ``cancel()`` or implicitly
    once its deadline passes. Blocking waits in the transport go through
    ``wait()`` so they return as soon as the token fires.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds from now after which the token counts as cancelled
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Fires the token."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """
        Blocks the calling thread for up to ``seconds``.

        Returns:
            True if the token fired during (or before) the wait
        """
        if seconds <= 0:
            return self.cancelled
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
            return True
        self._event.wait(seconds)
        return self.cancelled

    def raise_if_cancelled(self, message: str = "Operation cancelled") -> None:
        if self.cancelled:
            raise CancelledError(message)
