"""
Pytest configuration and fixtures for instagram-client-core tests.
"""

import json
from collections import deque
from typing import Any, Deque, List, Union

import pytest
import responses as responses_lib

from instagram_client.core.config import ClientConfig
from instagram_client.core.transport import RawResponse, Request, Transport
from instagram_client.instagram import Instagram


class FakeTransport(Transport):
    """In-memory transport: returns queued responses, records requests."""

    def __init__(self):
        self.requests: List[Request] = []
        self._queue: Deque[Union[RawResponse, Exception]] = deque()
        self.closed = False

    def queue(self, item: Union[RawResponse, Exception]) -> "FakeTransport":
        self._queue.append(item)
        return self

    def queue_json(self, payload: Any, status_code: int = 200, headers=None) -> "FakeTransport":
        return self.queue(RawResponse(status_code, headers or {}, json.dumps(payload).encode("utf-8")))

    @property
    def last_request(self) -> Request:
        return self.requests[-1]

    def send(self, request: Request) -> RawResponse:
        self.requests.append(request)
        item = self._queue.popleft() if self._queue else RawResponse(200, {}, b'{"data": []}')
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    """Client configuration without an access token."""
    return ClientConfig(
        client_id="test-client-id",
        client_secret="test-secret",
        client_ip="127.0.0.1",
        redirect_uri="https://example.com/callback",
        user_agent="instagram-client-tests/1.0",
    )


@pytest.fixture
def token_config(config):
    """Client configuration with an access token."""
    return config.with_access_token("test-access-token")


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def api(config, fake_transport):
    """Instagram facade over the in-memory transport."""
    client = Instagram(config, transport=fake_transport)
    yield client
    client.close()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps
