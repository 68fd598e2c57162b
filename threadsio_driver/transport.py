"""
Transports execute RequestDescriptors.

RequestsTransport talks to the live API over a requests.Session.
MockTransport never touches the network and answers every request with a
canned success body; it is what ThreadsIoClient(mock=True) uses.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from urllib.parse import urljoin

import requests

from .request import RequestDescriptor

logger = logging.getLogger(__name__)

MOCK_BODY = json.dumps({"success": True})


class Transport(ABC):
    """Executes a request and returns the raw response body."""

    @abstractmethod
    def send(self, request: RequestDescriptor) -> bytes:
        """
        Execute a request.

        Returns:
            Raw body of a successful (2xx) response

        Raises:
            requests.RequestException: On HTTP or network failure
        """

    def close(self):
        pass


class RequestsTransport(Transport):
    """
    HTTP transport backed by requests.

    No retry adapter is mounted: every failure surfaces exactly once.
    """

    def __init__(
        self,
        base_url: str,
        auth: Tuple[str, str],
        timeout: Optional[float] = 30,
        user_agent: str = "ThreadsIoDriver-Python-Driver/1.0.0",
        session: Optional[requests.Session] = None,
    ):
        # urljoin drops the last path segment unless the base ends with "/"
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.auth = auth
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """
        Create HTTP session with basic authentication.

        Content-Type is left to requests (json= sets application/json).
        """
        session = requests.Session()
        session.headers.update({
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        })
        session.auth = self.auth
        return session

    def url_for(self, request: RequestDescriptor) -> str:
        return urljoin(self.base_url, request.action)

    def send(self, request: RequestDescriptor) -> bytes:
        response = self.session.request(
            request.method,
            self.url_for(request),
            timeout=self.timeout,
            **request.params
        )
        response.raise_for_status()
        return response.content

    def close(self):
        if self.session:
            self.session.close()


class MockTransport(Transport):
    """
    Offline transport for development and tests.

    Records every request it receives in ``requests``.
    """

    def __init__(self, body: str = MOCK_BODY):
        self.body = body
        self.requests: List[RequestDescriptor] = []

    def send(self, request: RequestDescriptor) -> bytes:
        self.requests.append(request)
        logger.debug(f"[mock] {request.method} {request.action} (no network call)")
        return self.body.encode("utf-8")
