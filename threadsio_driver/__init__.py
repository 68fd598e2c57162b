"""
Threads.io Python Driver

A driver for the Threads.io analytics ingestion API.

Example:
    Basic usage:

    >>> from threadsio_driver import ThreadsIoClient
    >>>
    >>> # Create client from environment
    >>> client = ThreadsIoClient.from_env()
    >>>
    >>> # Identify a user
    >>> client.identify("user123", {"name": "Ritchie Blackmore", "instrument": "Guitar"})
    >>>
    >>> # Track an event
    >>> response = client.track("user123", "Connected", {"source": "web"})
    >>> print(f"Accepted: {response.success}")
    >>>
    >>> # Record a page view, then remove the user
    >>> client.page("user123", "Welcome Page", {"referrer": "google"})
    >>> client.remove("user123")
    >>>
    >>> client.close()

Supports:
    - identify, track, page and remove actions
    - HTTP Basic authentication with the event key
    - UTC wire timestamps (".000Z" suffix), defaulting to now
    - Mock mode for development without network access
    - Structured exception hierarchy

Authentication:
    Set environment variables:
    - THREADSIO_EVENT_KEY: Required (unless THREADSIO_MOCK=true)
    - THREADSIO_ENDPOINT: Base URL override (default: https://input.threads.io/v1/)
    - THREADSIO_MOCK: "true" or "false" (default: "false")
    - THREADSIO_DEBUG: "true" or "false" (default: "false")
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .client import ThreadsIoClient
from .dates import format_date
from .entities import User, Event, Page
from .request import RequestDescriptor, build_request
from .response import Response
from .service import ThreadsIoService
from .transport import Transport, RequestsTransport, MockTransport

from .exceptions import (
    ThreadsIoError,
    PlugError,
    InvalidKeyError,
    BadRequestError,
    ServerError,
    TransportError,
)

__all__ = [
    # Client classes
    "ThreadsIoClient",
    "ThreadsIoService",
    # Transports
    "Transport",
    "RequestsTransport",
    "MockTransport",
    # Data classes
    "RequestDescriptor",
    "Response",
    "User",
    "Event",
    "Page",
    # Helpers
    "build_request",
    "format_date",
    # Exceptions
    "ThreadsIoError",
    "PlugError",
    "InvalidKeyError",
    "BadRequestError",
    "ServerError",
    "TransportError",
]
