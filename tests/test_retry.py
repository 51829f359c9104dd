import httpx
import pytest

from ztcentral.network.cancel import CancellationToken
from ztcentral.network.client import RequestSpec, Transport
from ztcentral.network.errors import (
    CancelledError,
    ClientError,
    DecodeError,
    NetworkError,
    NotFoundError,
    ServerError,
)
from ztcentral.network.retry import RetryPolicy, exponential_backoff, linear_backoff

from tests.conftest import TOKEN


@pytest.fixture
def policy(transport):
    return RetryPolicy(transport, max_attempts=3, backoff=lambda attempt: 0)


def recording_backoff(seen):
    def backoff(attempt):
        seen.append(attempt)
        return 0
    return backoff


def test_recovers_after_transient_server_errors(policy, api):
    api.queue(httpx.Response(503), httpx.Response(503), httpx.Response(200, json={"id": "X"}))
    result = policy.send(RequestSpec("GET", "/network/X"), dict)
    assert result == {"id": "X"}
    assert len(api.requests) == 3


def test_authorization_sent_once_per_attempt(policy, api):
    api.queue(httpx.Response(502), httpx.Response(200))
    policy.send(RequestSpec("GET", "/network"))
    for request in api.requests:
        assert request.headers.get_list("authorization") == [f"bearer {TOKEN}"]


def test_server_errors_exhaust_attempts(policy, api):
    api.queue(httpx.Response(500), httpx.Response(502), httpx.Response(503), httpx.Response(200))
    with pytest.raises(ServerError) as excinfo:
        policy.send(RequestSpec("GET", "/network"))
    assert excinfo.value.status_code == 503
    assert len(api.requests) == 3


@pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 429])
def test_client_errors_are_not_retried(policy, api, status):
    api.queue(httpx.Response(status), httpx.Response(200))
    with pytest.raises(ClientError):
        policy.send(RequestSpec("GET", "/network"))
    assert len(api.requests) == 1


def test_network_errors_are_retried(policy, api):
    api.queue(httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), httpx.Response(200))
    policy.send(RequestSpec("GET", "/network"))
    assert len(api.requests) == 3


def test_network_errors_exhaust_attempts(policy, api):
    api.queue(*[httpx.ConnectError("refused") for _ in range(3)])
    with pytest.raises(NetworkError):
        policy.send(RequestSpec("GET", "/network"))
    assert len(api.requests) == 3


def test_unsupported_protocol_is_not_retried(transport, api):
    seen = []
    policy = RetryPolicy(transport, max_attempts=3, backoff=recording_backoff(seen))
    api.queue(httpx.UnsupportedProtocol("Request URL is missing an 'http://' or 'https://' protocol."))
    with pytest.raises(ClientError):
        policy.send(RequestSpec("GET", "/network"))
    assert len(api.requests) == 1
    assert seen == []


def test_missing_url_scheme_gets_one_attempt():
    seen = []
    transport = Transport(TOKEN, "central.test/api")
    policy = RetryPolicy(transport, max_attempts=3, backoff=recording_backoff(seen))
    try:
        with pytest.raises(ClientError):
            policy.send(RequestSpec("GET", "/network"))
    finally:
        transport.close()
    assert seen == []


def test_decode_errors_are_not_retried(policy, api):
    api.queue(httpx.Response(200, content=b"not json"), httpx.Response(200, json={}))
    with pytest.raises(DecodeError):
        policy.send(RequestSpec("GET", "/network"), dict)
    assert len(api.requests) == 1


def test_non_idempotent_requests_get_one_attempt(policy, api):
    api.queue(httpx.Response(503), httpx.Response(200))
    with pytest.raises(ServerError):
        policy.send(RequestSpec("POST", "/network", body=b"{}"))
    assert len(api.requests) == 1


def test_idempotent_post_is_retried(policy, api):
    api.queue(httpx.Response(503), httpx.Response(200))
    policy.send(RequestSpec("POST", "/network/X", body=b"{}", idempotent=True))
    assert len(api.requests) == 2


def test_single_attempt_policy(transport, api):
    policy = RetryPolicy(transport, max_attempts=1)
    api.queue(httpx.Response(503))
    with pytest.raises(ServerError):
        policy.send(RequestSpec("GET", "/network"))
    assert len(api.requests) == 1


def test_rejects_zero_attempts(transport):
    with pytest.raises(ValueError):
        RetryPolicy(transport, max_attempts=0)


def test_backoff_receives_failed_attempt_numbers(transport, api):
    seen = []
    policy = RetryPolicy(transport, max_attempts=4, backoff=recording_backoff(seen))
    api.queue(httpx.Response(500), httpx.Response(500), httpx.Response(500), httpx.Response(500))
    with pytest.raises(ServerError):
        policy.send(RequestSpec("GET", "/network"))
    assert seen == [1, 2, 3]


class TestCancellation:
    def test_cancelled_before_first_attempt(self, policy, api):
        cancel = CancellationToken()
        cancel.cancel()
        with pytest.raises(CancelledError):
            policy.send(RequestSpec("GET", "/network/X"), cancel=cancel)
        assert api.requests == []

    def test_cancelled_during_backoff(self, transport, api):
        cancel = CancellationToken()
        policy = RetryPolicy(transport, max_attempts=5, backoff=lambda attempt: 60)

        def unavailable(request):
            cancel.cancel()
            return httpx.Response(503)

        api.queue(unavailable, httpx.Response(200))
        with pytest.raises(CancelledError):
            policy.send(RequestSpec("GET", "/network"), cancel=cancel)
        assert len(api.requests) == 1

    def test_deadline_stops_retries(self, transport, api):
        policy = RetryPolicy(transport, max_attempts=5, backoff=lambda attempt: 60)
        api.queue(httpx.Response(503), httpx.Response(200))
        with pytest.raises(CancelledError):
            policy.send(RequestSpec("GET", "/network"), cancel=CancellationToken(timeout=0.05))
        assert len(api.requests) == 1


class TestBackoff:
    def test_exponential(self):
        backoff = exponential_backoff(base=0.5, cap=3)
        assert [backoff(n) for n in range(1, 6)] == [0.5, 1.0, 2.0, 3, 3]

    def test_linear(self):
        backoff = linear_backoff(step=2, cap=5)
        assert [backoff(n) for n in range(1, 5)] == [2, 4, 5, 5]

    def test_retry_after_overrides_backoff(self, transport):
        policy = RetryPolicy(transport, backoff=exponential_backoff(base=1, cap=10))
        assert policy.delay_for(1, ServerError("busy", 503, retry_after=4)) == 4
        assert policy.delay_for(1, ServerError("busy", 503, retry_after=120)) == 10
        assert policy.delay_for(2, ServerError("busy", 503)) == 2
        assert policy.delay_for(2, NetworkError("refused")) == 2

    def test_retry_after_header_is_honoured(self, transport, api):
        delays = []
        policy = RetryPolicy(transport, max_attempts=2, backoff=lambda attempt: 0)
        original = policy.delay_for

        def record(attempt, error):
            delay = original(attempt, error)
            delays.append(delay)
            return 0

        policy.delay_for = record
        api.queue(httpx.Response(503, headers={"Retry-After": "3"}), httpx.Response(200))
        policy.send(RequestSpec("GET", "/network"))
        assert delays == [3.0]

    def test_not_found_is_terminal(self, policy, api):
        api.queue(httpx.Response(404, json={"message": "network not found"}))
        with pytest.raises(NotFoundError, match="network not found"):
            policy.send(RequestSpec("GET", "/network/missing"))
