"""
Request, response and query types for the geocoding gateway.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ForwardQuery:
    """Free-text place search."""

    text: str

    operation = "forward"

    def cache_key(self, separator: str = "") -> str:
        return self.text


@dataclass(frozen=True)
class ReverseQuery:
    """Coordinate to place-name search."""

    latitude: str
    longitude: str

    operation = "reverse"

    def cache_key(self, separator: str = "") -> str:
        # With the default empty separator ("1", "23") and ("12", "3") share a key
        return f"{self.latitude}{separator}{self.longitude}"


Query = Union[ForwardQuery, ReverseQuery]


class RouteOutcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    BAD_REQUEST = "bad_request"


@dataclass
class RouteResult:
    outcome: RouteOutcome
    query: Optional[Query] = None
    message: str = ""


@dataclass
class GatewayRequest:
    """Inbound request as delivered by the invocation entrypoint."""

    method: str
    path: str
    query_params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    request_id: Optional[str] = None

    def header(self, name: str) -> Optional[str]:
        """Look up a header by its supplied key, then case-insensitively."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @property
    def origin(self) -> Optional[str]:
        return self.header("Origin")

    @classmethod
    def from_proxy_event(cls, event: Dict[str, Any]) -> "GatewayRequest":
        """Build a request from an API Gateway proxy event."""
        request_context = event.get("requestContext") or {}
        return cls(
            method=(event.get("httpMethod") or "").upper(),
            path=event.get("path") or "",
            query_params=dict(event.get("queryStringParameters") or {}),
            headers=dict(event.get("headers") or {}),
            request_id=request_context.get("requestId"),
        )


@dataclass
class GatewayResponse:
    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    def to_proxy_response(self) -> Dict[str, Any]:
        """Convert to the API Gateway proxy response shape."""
        return {
            "statusCode": self.status_code,
            "body": self.body,
            "headers": dict(self.headers),
        }
