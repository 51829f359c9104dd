"""
Retry policy for transient API failures.
"""
import logging
from typing import Any, Callable, Optional

from ztcentral.network.cancel import CancellationToken
from ztcentral.network.client import RequestSpec, Transport
from ztcentral.network.errors import APIError, CancelledError, ServerError

logger = logging.getLogger(__name__)

# Total attempts: one request plus four retries
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_BASE = 1.0
DEFAULT_BACKOFF_CAP = 30.0

Backoff = Callable[[int], float]


def exponential_backoff(base: float = DEFAULT_BACKOFF_BASE, cap: float = DEFAULT_BACKOFF_CAP) -> Backoff:
    """Delay of ``base * 2 ** (attempt - 1)`` seconds, capped at ``cap``."""
    def backoff(attempt: int) -> float:
        return min(cap, base * (2 ** (attempt - 1)))
    backoff.cap = cap
    return backoff


def linear_backoff(step: float = DEFAULT_BACKOFF_BASE, cap: float = DEFAULT_BACKOFF_CAP) -> Backoff:
    """Delay of ``step * attempt`` seconds, capped at ``cap``."""
    def backoff(attempt: int) -> float:
        return min(cap, step * attempt)
    backoff.cap = cap
    return backoff


class RetryPolicy:
    """
    Retries idempotent requests that failed with a transient error.

    Server errors (5xx) and network errors are retried; client errors,
    decode errors and cancellations are raised immediately.
    """

    def __init__(self, transport: Transport, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 backoff: Optional[Backoff] = None):
        """
        Args:
            transport: Transport performing the individual attempts
            max_attempts: Total number of attempts, including the first one
            backoff: Maps the number of the failed attempt (1-based) to a
                delay in seconds; exponential by default
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.transport = transport
        self.max_attempts = max_attempts
        self.backoff = backoff or exponential_backoff()

    def delay_for(self, attempt: int, error: APIError) -> float:
        delay = self.backoff(attempt)
        if isinstance(error, ServerError) and error.retry_after is not None:
            delay = error.retry_after
            cap = getattr(self.backoff, "cap", None)
            if cap is not None:
                delay = min(delay, cap)
        return max(0.0, delay)

    def send(self, spec: RequestSpec, target: Any = None,
             cancel: Optional[CancellationToken] = None) -> Any:
        """
        Sends ``spec`` through the transport, retrying transient failures.

        Raises:
            CancelledError: If ``cancel`` fires before an attempt or during a backoff wait
            APIError: The terminal error, or the last one once attempts run out
        """
        cancel = cancel or CancellationToken()
        attempts = self.max_attempts if spec.idempotent else 1

        attempt = 0
        while True:
            attempt += 1
            cancel.raise_if_cancelled(f"{spec.method} {spec.path} cancelled after {attempt - 1} attempt(s)")
            try:
                return self.transport.send(spec, target, cancel)
            except APIError as e:
                if not e.retryable:
                    raise
                if attempt >= attempts:
                    if attempts > 1:
                        logger.error(f"{spec.method} {spec.path} failed after {attempt} attempts: {e}")
                    raise

                wait_time = self.delay_for(attempt, e)
                logger.warning(
                    f"{type(e).__name__} on {spec.method} {spec.path}, "
                    f"retrying ({attempt}/{attempts - 1}) after {wait_time:.2f}s"
                )
                if cancel.wait(wait_time):
                    raise CancelledError(f"{spec.method} {spec.path} cancelled during backoff") from e
