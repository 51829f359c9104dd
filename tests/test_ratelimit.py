import threading
from datetime import datetime, timedelta, timezone

import pytest

from ztcentral.network.ratelimit import (
    RateLimit,
    RateLimitState,
    parse_duration,
    parse_reset,
)

NOW = datetime(2024, 8, 6, 20, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value,expected", [
    ("5m0s", timedelta(minutes=5)),
    ("1h2m3.5s", timedelta(hours=1, minutes=2, seconds=3.5)),
    ("250ms", timedelta(milliseconds=250)),
    ("0", timedelta(0)),
    ("-1s", timedelta(seconds=-1)),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "5", "5x", "m5", "5m 0s", "soon"])
def test_parse_duration_rejects_garbage(value):
    assert parse_duration(value) is None


def test_parse_reset_duration_is_relative_to_now():
    assert parse_reset("5m0s", now=NOW) == NOW + timedelta(minutes=5)


def test_parse_reset_rfc1123_date():
    assert parse_reset("Tue, 06 Aug 2024 20:53:48 UTC") == datetime(2024, 8, 6, 20, 53, 48, tzinfo=timezone.utc)


def test_parse_reset_iso_timestamp():
    assert parse_reset("2024-08-06T20:53:48Z") == datetime(2024, 8, 6, 20, 53, 48, tzinfo=timezone.utc)


def test_parse_reset_numbers():
    assert parse_reset("30", now=NOW) == NOW + timedelta(seconds=30)
    assert parse_reset("1722977628") == datetime.fromtimestamp(1722977628, tz=timezone.utc)


def test_parse_reset_unparseable():
    assert parse_reset("whenever") is None
    assert parse_reset("   ") is None


def test_from_headers():
    limit = RateLimit.from_headers({
        "x-ratelimit-limit": "20",
        "x-ratelimit-remaining": "14",
        "x-ratelimit-reset": "Tue, 06 Aug 2024 20:53:48 UTC",
    })
    assert limit.limit == 20
    assert limit.remaining == 14
    assert limit.reset_at == datetime(2024, 8, 6, 20, 53, 48, tzinfo=timezone.utc)
    assert limit.known


def test_from_headers_without_reset():
    limit = RateLimit.from_headers({"x-ratelimit-limit": "10", "x-ratelimit-remaining": "10"})
    assert (limit.limit, limit.remaining, limit.reset_at) == (10, 10, None)


@pytest.mark.parametrize("headers", [
    {},
    {"x-ratelimit-limit": "lots", "x-ratelimit-remaining": "1"},
    {"x-ratelimit-limit": "20", "x-ratelimit-remaining": "3", "x-ratelimit-reset": "later"},
])
def test_from_headers_unknown(headers):
    limit = RateLimit.from_headers(headers)
    assert limit == RateLimit()
    assert not limit.known


class TestPacingDelay:
    def test_no_delay_without_limit(self):
        assert RateLimit().pacing_delay() == 0.0
        assert RateLimit(limit=0, remaining=0).pacing_delay() == 0.0

    def test_no_delay_with_full_quota(self):
        assert RateLimit(limit=20, remaining=20).pacing_delay() == 0.0
        assert RateLimit(limit=20, remaining=25).pacing_delay() == 0.0

    def test_delay_proportional_to_used_quota(self):
        assert RateLimit(limit=20, remaining=14).pacing_delay() == pytest.approx(0.06)
        assert RateLimit(limit=20, remaining=14).pacing_delay(per_unit=1.0) == pytest.approx(6.0)

    def test_delay_monotonic_in_gap(self):
        delays = [RateLimit(limit=20, remaining=r).pacing_delay() for r in range(20, -1, -1)]
        assert delays == sorted(delays)
        assert delays[0] == 0.0
        assert delays[-1] > delays[1] > 0


class TestRateLimitState:
    def test_starts_unknown(self):
        assert RateLimitState().snapshot() == RateLimit()

    def test_last_update_wins(self):
        state = RateLimitState()
        state.update({"x-ratelimit-limit": "20", "x-ratelimit-remaining": "5"})
        assert state.pacing_delay() == pytest.approx(0.15)

        state.update({"x-ratelimit-limit": "20", "x-ratelimit-remaining": "19"})
        assert state.snapshot().remaining == 19

        state.update({})
        assert state.snapshot() == RateLimit()
        assert state.pacing_delay() == 0.0

    def test_concurrent_updates_leave_a_consistent_snapshot(self):
        state = RateLimitState()

        def worker(remaining):
            for _ in range(200):
                state.update({"x-ratelimit-limit": "100", "x-ratelimit-remaining": str(remaining)})

        threads = [threading.Thread(target=worker, args=(n,)) for n in (10, 50, 90)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = state.snapshot()
        assert snapshot.limit == 100
        assert snapshot.remaining in (10, 50, 90)
