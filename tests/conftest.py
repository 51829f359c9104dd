import httpx
import pytest

from ztcentral import Client
from ztcentral.network.client import Transport

BASE_URL = "https://central.test/api"
TOKEN = "test-token"


class MockAPI:
    """
    Request handler for ``httpx.MockTransport``.

    Queued items are served in order: responses are returned, exceptions are
    raised and callables are invoked with the request. Once the queue is
    empty every request gets an empty 200.
    """

    def __init__(self):
        self.requests = []
        self._queue = []

    def queue(self, *items):
        self._queue.extend(items)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._queue.pop(0) if self._queue else httpx.Response(200)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return item

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def api():
    return MockAPI()


@pytest.fixture
def http_client(api):
    client = httpx.Client(transport=httpx.MockTransport(api))
    yield client
    client.close()


@pytest.fixture
def transport(http_client):
    return Transport(TOKEN, BASE_URL, http_client=http_client)


@pytest.fixture
def client(http_client):
    with Client(TOKEN, BASE_URL, http_client=http_client, backoff=lambda attempt: 0) as c:
        yield c
