"""
Threads.io Driver Exception Hierarchy

Every error raised by the driver derives from ThreadsIoError, so callers can
catch "any driver error" generically or a specific kind.
Each exception keeps the request/response context it was raised with.
"""

from typing import Dict, Any, Optional


class ThreadsIoError(Exception):
    """Base exception for all driver errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        *,
        status_code: Optional[int] = None,
        request: Any = None,
        response: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        self.request = request
        self.response = response
        self.cause = cause

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class PlugError(ThreadsIoError):
    """
    A caller supplied a malformed argument.

    Raised before any network call. The message names the offending
    parameter (traits, properties or timestamp).
    """
    pass


class InvalidKeyError(ThreadsIoError):
    """
    The event key was rejected (HTTP 401) or is missing.

    Callers should stop sending further events rather than retry.
    """
    pass


class BadRequestError(ThreadsIoError):
    """Any other client-side (4xx) rejection."""
    pass


class ServerError(ThreadsIoError):
    """
    Server-side (5xx) failure, or a success response with an unreadable body.

    Not retried by the driver; retry policy is up to the caller.
    """
    pass


class TransportError(ThreadsIoError):
    """No HTTP response was received (connection refused, timeout, ...)."""
    pass
