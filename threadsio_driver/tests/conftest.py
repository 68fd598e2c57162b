"""
Pytest configuration and shared fixtures for Threads.io driver tests.

Provides:
- Mock session and client fixtures
- HTTP response factory
- Test data
"""

import json
import logging
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import requests


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables."""
    monkeypatch.setenv("THREADSIO_EVENT_KEY", "test_event_key_12345")
    monkeypatch.setenv("THREADSIO_ENDPOINT", "http://localhost:8080/v1/")
    monkeypatch.setenv("THREADSIO_MOCK", "false")
    monkeypatch.setenv("THREADSIO_TIMEOUT", "15")
    monkeypatch.setenv("THREADSIO_DEBUG", "false")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all THREADSIO_* variables."""
    for name in ("THREADSIO_EVENT_KEY", "THREADSIO_ENDPOINT", "THREADSIO_MOCK",
                 "THREADSIO_TIMEOUT", "THREADSIO_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def http_response():
    """Factory building real requests.Response objects."""
    def _build(status_code=200, body=None, url="https://input.threads.io/v1/track"):
        response = requests.Response()
        response.status_code = status_code
        response.url = url
        response.encoding = "utf-8"
        if body is None:
            body = {"success": True}
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        response._content = body.encode("utf-8") if isinstance(body, str) else body
        return response
    return _build


@pytest.fixture
def mock_session(http_response):
    """Create a mock requests session answering with success."""
    session = MagicMock()
    session.headers = {}
    session.request = MagicMock(return_value=http_response(200, {"success": True}))
    return session


@pytest.fixture
def threads_client(mock_session):
    """Create a test client whose transport uses the mocked session."""
    from threadsio_driver import ThreadsIoClient, RequestsTransport

    transport = RequestsTransport(
        base_url=ThreadsIoClient.END_POINT,
        auth=("test_event_key_12345", ""),
        timeout=30,
        session=mock_session,
    )
    return ThreadsIoClient("test_event_key_12345", transport=transport)


@pytest.fixture
def mock_client():
    """Create a client in mock mode."""
    from threadsio_driver import ThreadsIoClient

    return ThreadsIoClient("test_event_key_12345", mock=True)


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2016, 3, 1, 14, 5, 9, tzinfo=timezone.utc)


@pytest.fixture
def sample_traits() -> dict:
    return {
        "name": "Ritchie Blackmore",
        "instrument": "Guitar",
        "brands": ["gibson", "squier", "fender"],
    }


@pytest.fixture(autouse=True)
def reset_driver_logger():
    """Undo package-wide log levels set by debug clients."""
    yield
    logging.getLogger("threadsio_driver").setLevel(logging.NOTSET)
