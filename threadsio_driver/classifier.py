"""
Failure classification.

Converts requests exceptions into the driver's exception hierarchy:
    401         -> InvalidKeyError
    other 4xx   -> BadRequestError
    5xx         -> ServerError
    no response -> TransportError
"""

from typing import Any, Optional

import requests

from .exceptions import (
    ThreadsIoError,
    InvalidKeyError,
    BadRequestError,
    ServerError,
    TransportError,
)


def extract_error_message(response: requests.Response) -> str:
    """Pull a readable message out of an error response body."""
    try:
        error_data = response.json()
        if isinstance(error_data, dict):
            return str(error_data.get("error", error_data.get("message", "Unknown error")))
        return response.text[:500]
    except ValueError:
        return (response.text or "")[:500]


def classify_error(
    error: requests.RequestException,
    request: Any = None,
    context: str = ""
) -> ThreadsIoError:
    """
    Build the driver exception matching a transport failure.

    The caller is expected to raise the result chained to the original
    exception (``raise classify_error(e) from e``).

    Args:
        error: Exception raised by the transport
        request: RequestDescriptor that was being executed, if known
        context: Context string (e.g., "track")

    Returns:
        The ThreadsIoError subclass instance for this failure
    """
    response: Optional[requests.Response] = getattr(error, "response", None)

    if response is None:
        return TransportError(
            f"Request failed before a response was received: {error}",
            details={"context": context, "error": str(error)},
            request=request,
            cause=error,
        )

    status_code = response.status_code
    error_msg = extract_error_message(response)
    details = {
        "status_code": status_code,
        "context": context,
        "api_response": error_msg,
    }
    kwargs = dict(
        details=details,
        status_code=status_code,
        request=request,
        response=response,
        cause=error,
    )

    if status_code == 401:
        details["suggestion"] = "Check your Threads.io event key"
        return InvalidKeyError(f"Authentication failed: {error_msg}", **kwargs)

    elif 400 <= status_code < 500:
        return BadRequestError(f"Request rejected: {error_msg}", **kwargs)

    elif 500 <= status_code < 600:
        return ServerError(f"API server error: {error_msg}", **kwargs)

    else:
        return TransportError(f"Unexpected HTTP status {status_code}: {error_msg}", **kwargs)
