"""
Request descriptors.

A RequestDescriptor is transport-agnostic: it names the HTTP method, the
action (which is also the URL path segment) and the keyword options the
transport passes along. Params always travel under the "json" marker so the
payload is sent as a JSON request body.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Mapping, Optional

JSON_BODY = "json"


@dataclass(frozen=True)
class RequestDescriptor:
    """A single API call, ready to be executed by a transport"""
    action: str
    params: Dict[str, Any] = field(default_factory=dict)
    method: str = "POST"

    @property
    def payload(self) -> Optional[Dict[str, Any]]:
        """The JSON body carried by this request."""
        return self.params.get(JSON_BODY)


def build_request(
    action: str,
    params: Optional[Mapping[str, Any]] = None,
    method: str = "POST"
) -> RequestDescriptor:
    """
    Prepare a request to be executed by ThreadsIoClient.call().

    Contents of params are not validated here.

    Args:
        action: API action (identify, track, page, remove)
        params: JSON body fields
        method: HTTP method (default: POST)

    Returns:
        RequestDescriptor with params wrapped under the JSON body marker
    """
    return RequestDescriptor(
        action=action,
        params={JSON_BODY: dict(params or {})},
        method=method,
    )
