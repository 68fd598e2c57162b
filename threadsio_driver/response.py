"""
Response wrapper for successful API calls.
"""

import json
from types import MappingProxyType
from typing import Any, Mapping, Union


class Response:
    """
    Read-only view over a decoded Threads.io response body.

    Example:
        response = client.track("user123", "Signed Up", {"plan": "pro"})
        if response.success:
            ...
    """

    def __init__(self, body: Union[str, bytes]):
        """
        Args:
            body: Raw response body (JSON object as text or bytes)

        Raises:
            ValueError: If the body is not a JSON object
        """
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")

        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        self._raw = body
        self._data = MappingProxyType(data)

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def success(self) -> bool:
        """Whether the API acknowledged the call."""
        return bool(self._data.get("success", False))

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self):
        return f"Response({dict(self._data)!r})"
