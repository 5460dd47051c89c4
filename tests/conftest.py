"""
Pytest fixtures for the Winbooks client tests.
"""
import json
from urllib.parse import parse_qs

import httpx
import pytest

from winbooks.config import Settings
from winbooks.integrations.transport import HttpTransport
from winbooks.services.winbooks_service import Winbooks

API_HOST = "https://api.test/wow/v2/"


class StubApi:
    """
    Scripted Winbooks API behind httpx.MockTransport.

    Token calls answer from token_responses in order; data calls answer
    from data_responses in order. Every request is recorded.
    """

    def __init__(self):
        self.requests = []
        self.token_responses = []
        self.data_responses = []

    def token(self, status=200, payload=None):
        self.token_responses.append((status, payload))
        return self

    def data(self, status=200, payload=None):
        self.data_responses.append((status, payload))
        return self

    @property
    def token_requests(self):
        return [r for r in self.requests if r.url.path.endswith("/OAuth20/Token")]

    @property
    def data_requests(self):
        return [r for r in self.requests if "/app/" in r.url.path]

    def form(self, request: httpx.Request) -> dict:
        return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.token_responses if request.url.path.endswith("/OAuth20/Token") else self.data_responses
        if not queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")

        status, payload = queue.pop(0)
        if payload is None:
            return httpx.Response(status)
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, content=json.dumps(payload).encode())


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, api_host=API_HOST)


@pytest.fixture
def stub_api():
    return StubApi()


@pytest.fixture
def transport(stub_api):
    client = httpx.Client(transport=httpx.MockTransport(stub_api.handler))
    return HttpTransport(API_HOST, client=client)


@pytest.fixture
def client(transport, settings):
    """Unauthenticated client wired to the stub API."""
    return Winbooks(transport=transport, settings=settings)


@pytest.fixture
def seeded_client(transport, settings):
    """Client pre-seeded with persisted tokens and a folder."""
    return Winbooks(
        access_token="old-access",
        refresh_token="old-refresh",
        email="user@example.com",
        folder="PARFILUX",
        transport=transport,
        settings=settings,
    )


@pytest.fixture
def mock_token_response():
    return {
        "access_token": "A1",
        "refresh_token": "R1",
        "token_type": "bearer",
        "expires_in": 3600,
    }
