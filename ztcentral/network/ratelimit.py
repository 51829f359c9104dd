"""
Rate limit bookkeeping for the ZeroTier Central API.

Central reports its quota on every response:

    X-Ratelimit-Limit: 20
    X-Ratelimit-Remaining: 14
    X-Ratelimit-Reset: Tue, 06 Aug 2024 20:53:48 UTC

Some deployments send the reset hint as a Go duration ("5m0s") instead of a
date, so both are accepted.
"""
import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"

# Delay applied per unit of exhausted quota when pacing is enabled
DEFAULT_PER_UNIT_INTERVAL = 0.01

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_EPOCH_THRESHOLD = 1_000_000_000


def parse_duration(value: str) -> Optional[timedelta]:
    """
    Parses a Go-style duration string such as ``5m0s`` or ``1h2m3.5s``.

    Returns:
        The duration, or None if the string is not a valid duration
    """
    text = value.strip()
    sign = 1.0
    if text[:1] in ("-", "+"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        return None

    seconds = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            return None
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        return None
    return timedelta(seconds=sign * seconds)


def parse_reset(value: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Converts a reset hint into an absolute UTC timestamp.

    Accepts a Go duration, an RFC 1123 date, an ISO-8601 timestamp or a bare
    number (epoch seconds when large, otherwise seconds from now).
    """
    now = now or datetime.now(timezone.utc)
    text = value.strip()
    if not text:
        return None

    try:
        number = float(text)
    except ValueError:
        pass
    else:
        if number >= _EPOCH_THRESHOLD:
            return datetime.fromtimestamp(number, tz=timezone.utc)
        return now + timedelta(seconds=number)

    duration = parse_duration(text)
    if duration is not None:
        return now + duration

    try:
        stamp = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        stamp = None
    if stamp is None:
        try:
            stamp = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


@dataclass(frozen=True)
class RateLimit:
    """Snapshot of the quota reported by the last response."""

    limit: int = 0
    remaining: int = 0
    reset_at: Optional[datetime] = None

    @property
    def known(self) -> bool:
        return self.limit != 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimit":
        """
        Parses ``X-Ratelimit-*`` headers.

        Missing headers, or any header that fails to parse, yield the
        "no limit known" snapshot.
        """
        raw_limit = headers.get(LIMIT_HEADER)
        raw_remaining = headers.get(REMAINING_HEADER)
        raw_reset = headers.get(RESET_HEADER)
        if raw_limit is None and raw_remaining is None:
            return cls()

        try:
            limit = int(raw_limit) if raw_limit is not None else 0
            remaining = int(raw_remaining) if raw_remaining is not None else 0
        except ValueError:
            logger.debug(f"Ignoring malformed rate limit headers: {raw_limit!r}/{raw_remaining!r}")
            return cls()

        reset_at = None
        if raw_reset is not None:
            reset_at = parse_reset(raw_reset)
            if reset_at is None:
                logger.debug(f"Ignoring rate limit headers with unparseable reset: {raw_reset!r}")
                return cls()

        return cls(limit=limit, remaining=remaining, reset_at=reset_at)

    def pacing_delay(self, per_unit: float = DEFAULT_PER_UNIT_INTERVAL) -> float:
        """Seconds to wait before the next request, proportional to the used quota."""
        if self.limit == 0 or self.remaining >= self.limit:
            return 0.0
        return (self.limit - self.remaining) * per_unit


class RateLimitState:
    """Shared, lock-protected holder of the latest ``RateLimit``."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current = RateLimit()

    def update(self, headers: Mapping[str, str]) -> RateLimit:
        """Overwrites the state from response headers (last response wins)."""
        new = RateLimit.from_headers(headers)
        with self._lock:
            self._current = new
        return new

    def snapshot(self) -> RateLimit:
        with self._lock:
            return self._current

    def pacing_delay(self, per_unit: float = DEFAULT_PER_UNIT_INTERVAL) -> float:
        return self.snapshot().pacing_delay(per_unit)
