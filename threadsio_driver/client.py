"""
Threads.io Driver

Python driver for the Threads.io ingestion API.

Supports:
- User identification (identify)
- Event tracking (track)
- Page views (page)
- User removal (remove)

Every call is a JSON POST to <end_point><action>, authenticated with HTTP
Basic auth (event key as username, empty password).
"""

import os
import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

import requests

from .classifier import classify_error
from .dates import format_date, utcnow
from .exceptions import InvalidKeyError, PlugError, ServerError
from .request import RequestDescriptor, build_request
from .response import Response
from .transport import MockTransport, RequestsTransport, Transport


class ThreadsIoClient:
    """
    Threads.io API client.

    Example:
        client = ThreadsIoClient("my-event-key")
        client.identify("user123", {"name": "Ritchie Blackmore"})
        client.track("user123", "Connected", {"source": "web"})
        client.close()

    For local development pass ``mock=True``: no request leaves the process
    and every call returns ``Response({"success": true})``.
    """

    END_POINT = "https://input.threads.io/v1/"

    IDENTIFY_ACTION = "identify"
    TRACK_ACTION = "track"
    VISIT_ACTION = "page"
    REMOVE_ACTION = "remove"

    def __init__(
        self,
        event_key: str,
        end_point: Optional[str] = None,
        mock: bool = False,
        transport: Optional[Transport] = None,
        timeout: Optional[float] = 30,
        debug: bool = False,
    ):
        """
        Initialize the client.

        Args:
            event_key: Threads.io API key
            end_point: Base URL (default: END_POINT)
            mock: Answer every call locally without network access
            transport: Custom transport (overrides mock and end_point)
            timeout: Request timeout in seconds, passed to requests
            debug: Enable debug logging for the whole driver package
        """
        self._event_key = event_key
        self._end_point = end_point or self.END_POINT
        self.timeout = timeout
        self.debug = debug

        self.logger = logging.getLogger(__name__)
        if debug:
            logging.getLogger(__package__).setLevel(logging.DEBUG)

        if transport is not None:
            self.transport = transport
        elif mock:
            self.transport = MockTransport()
        else:
            self.transport = RequestsTransport(
                base_url=self._end_point,
                auth=(self._event_key, ""),
                timeout=timeout,
            )
        self._mock = isinstance(self.transport, MockTransport)

        if self.debug:
            key_hint = f"{event_key[:6]}..." if event_key else "<none>"
            self.logger.debug(
                f"[init] end_point={self._end_point} mock={self._mock} event_key={key_hint}"
            )

    @classmethod
    def from_env(cls, **kwargs) -> "ThreadsIoClient":
        """
        Create a client from environment variables.

        Environment variables:
            THREADSIO_EVENT_KEY: API key (required unless mock mode)
            THREADSIO_ENDPOINT: Base URL override (optional)
            THREADSIO_MOCK: "true" to enable mock mode (default: "false")
            THREADSIO_TIMEOUT: Request timeout in seconds (default: 30)
            THREADSIO_DEBUG: "true" to enable debug logging (default: "false")

        Keyword arguments take precedence over the environment.

        Raises:
            InvalidKeyError: If THREADSIO_EVENT_KEY is not set outside mock mode
        """
        settings = {
            "event_key": os.getenv("THREADSIO_EVENT_KEY"),
            "end_point": os.getenv("THREADSIO_ENDPOINT") or None,
            "mock": os.getenv("THREADSIO_MOCK", "false").lower() == "true",
            "timeout": float(os.getenv("THREADSIO_TIMEOUT", "30")),
            "debug": os.getenv("THREADSIO_DEBUG", "false").lower() == "true",
        }
        settings.update(kwargs)

        if not settings["event_key"]:
            if not settings["mock"]:
                raise InvalidKeyError(
                    "Missing Threads.io credentials. Set THREADSIO_EVENT_KEY environment variable.",
                    details={
                        "env_vars": ["THREADSIO_EVENT_KEY"],
                        "suggestion": "Set THREADSIO_EVENT_KEY in your .env file or use THREADSIO_MOCK=true",
                    }
                )
            settings["event_key"] = ""

        return cls(**settings)

    @property
    def event_key(self) -> str:
        return self._event_key

    @property
    def end_point(self) -> str:
        return self._end_point

    @property
    def mock(self) -> bool:
        """True when calls are answered by a MockTransport, injected or not."""
        return self._mock

    # ========================================================================
    # API Actions
    # ========================================================================

    def identify(
        self,
        user_id: str,
        traits: Any,
        timestamp: Optional[datetime] = None
    ) -> Response:
        """
        Identify a user and attach traits (API method "identify").

        Args:
            user_id: Your identifier for the user
            traits: Mapping (or list) of user traits
            timestamp: When the identification happened (default: now)

        Raises:
            PlugError: If traits is not a mapping/list or timestamp is naive
        """
        if not isinstance(traits, (Mapping, list, tuple)):
            raise PlugError(
                "The traits you passed to the user are wrong. "
                "Please verify its format (mapping) or values.",
                details={"parameter": "traits", "provided": type(traits).__name__}
            )
        self._require_json(traits, "traits")

        request = build_request(self.IDENTIFY_ACTION, {
            "userId": user_id,
            "timestamp": self._timestamp(timestamp),
            "traits": self._plain(traits),
        })
        return self.call(request)

    def track(
        self,
        user_id: str,
        event: str,
        properties: Any,
        timestamp: Optional[datetime] = None
    ) -> Response:
        """
        Track an event performed by a user (API method "track").

        Raises:
            PlugError: If properties is not a mapping or timestamp is naive
        """
        self._require_mapping(properties, "properties", "tracking")
        self._require_json(properties, "properties")

        request = build_request(self.TRACK_ACTION, {
            "userId": user_id,
            "event": event,
            "timestamp": self._timestamp(timestamp),
            "properties": dict(properties),
        })
        return self.call(request)

    def page(
        self,
        user_id: str,
        name: str,
        properties: Any,
        timestamp: Optional[datetime] = None
    ) -> Response:
        """
        Record a page view (API method "page").

        Unlike the other actions, the event key is also sent in the body.

        Raises:
            PlugError: If properties is not a mapping or timestamp is naive
        """
        self._require_mapping(properties, "properties", "page")
        self._require_json(properties, "properties")

        request = build_request(self.VISIT_ACTION, {
            "eventKey": self._event_key,
            "userId": user_id,
            "name": name,
            "properties": dict(properties),
            "timestamp": self._timestamp(timestamp),
        })
        return self.call(request)

    def remove(self, user_id: str, timestamp: Optional[datetime] = None) -> Response:
        """Remove a user (API method "remove")."""
        request = build_request(self.REMOVE_ACTION, {
            "timestamp": self._timestamp(timestamp),
            "userId": user_id,
        })
        return self.call(request)

    # ========================================================================
    # Dispatch
    # ========================================================================

    def call(self, request: RequestDescriptor) -> Response:
        """
        Execute a prepared request.

        Returns:
            Response wrapping the decoded body

        Raises:
            InvalidKeyError: HTTP 401
            BadRequestError: Other 4xx
            ServerError: 5xx, or a success body that is not a JSON object
            TransportError: No response received
        """
        if self.debug:
            self.logger.debug(
                f"[{request.action}] {request.method} {self._end_point}{request.action}"
            )

        try:
            body = self.transport.send(request)
        except requests.RequestException as e:
            error = classify_error(e, request=request, context=request.action)
            if self.debug:
                self.logger.debug(f"[{request.action}] failed: {error}")
            raise error from e

        try:
            return Response(body)
        except ValueError as e:
            raise ServerError(
                f"{request.action} returned an invalid JSON body",
                details={"context": request.action, "error": str(e)},
                request=request,
                cause=e,
            ) from e

    def close(self):
        """Close the underlying transport."""
        self.transport.close()
        if self.debug:
            self.logger.debug("Transport closed")

    def __enter__(self) -> "ThreadsIoClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ========================================================================
    # Internal Methods
    # ========================================================================

    @staticmethod
    def _require_mapping(value: Any, parameter: str, function: str):
        if not isinstance(value, Mapping):
            raise PlugError(
                f"The {parameter} you passed to the {function} function are wrong. "
                "Please verify its format (mapping) or values.",
                details={"parameter": parameter, "provided": type(value).__name__}
            )

    @classmethod
    def _require_json(cls, value: Any, parameter: str):
        """Reject payloads requests cannot encode (its json= uses allow_nan=False)."""
        try:
            json.dumps(cls._plain(value), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise PlugError(
                f"The {parameter} you passed cannot be encoded as JSON: {e}",
                details={"parameter": parameter, "error": str(e)}
            ) from e

    @staticmethod
    def _plain(value: Any) -> Any:
        """Copy mappings and tuples into JSON-friendly dict/list."""
        if isinstance(value, Mapping):
            return dict(value)
        return list(value)

    @staticmethod
    def _timestamp(value: Optional[datetime]) -> str:
        if value is None:
            value = utcnow()
        try:
            return format_date(value)
        except (ValueError, AttributeError) as e:
            raise PlugError(
                "The timestamp you passed is wrong. Please pass a timezone-aware datetime.",
                details={"parameter": "timestamp", "provided": repr(value)}
            ) from e
