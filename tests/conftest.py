"""
Shared pytest configuration and fixtures for the test suite.

Upstream HTTP traffic is faked by patching ``httpx.AsyncClient``; the relay
app is driven through FastAPI's ``TestClient`` (which uses a sync transport
and is unaffected by the patch).
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from mediguide_relay.main import create_app
from mediguide_relay.settings import Settings


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self._text = text
        self.status_code = status_code

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class MockAsyncClient:
    """Stand-in for ``httpx.AsyncClient`` replaying canned responses."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.init_kwargs = []

    def __call__(self, *args, **kwargs):
        self.init_kwargs.append(kwargs)
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": str(url), **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "google: marks tests that exercise Google upstream clients"
    )


@pytest.fixture
def mock_httpx():
    """Patch ``httpx.AsyncClient`` with a client replaying the given responses.

    Responses may be ``FakeResponse`` instances or exceptions to raise.
    """
    patchers = []

    def _install(*responses):
        fake = MockAsyncClient(responses)
        patcher = patch("httpx.AsyncClient", new=fake)
        patcher.start()
        patchers.append(patcher)
        return fake

    yield _install
    for patcher in reversed(patchers):
        patcher.stop()


@pytest.fixture
def fake_response():
    """Factory for canned upstream responses."""
    return FakeResponse


@pytest.fixture
def settings():
    """Relay settings isolated from the process environment."""
    with patch.dict("os.environ", {}, clear=True):
        return Settings(
            _env_file=None,
            google_api_key="test-key",
            disconnect_poll_interval=0.05,
        )


@pytest.fixture
def unconfigured_settings():
    with patch.dict("os.environ", {}, clear=True):
        return Settings(_env_file=None)


@pytest.fixture
def client(settings):
    """Test client for a relay app built around ``settings``."""
    return TestClient(create_app(settings))
