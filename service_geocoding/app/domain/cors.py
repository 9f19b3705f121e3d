"""
Origin allow-list and CORS header policy.
"""

from typing import Dict, FrozenSet, Iterable, Optional

from ..models import GatewayRequest, GatewayResponse

LOCALHOST_ORIGIN = "http://localhost:3000"
GITHUB_PAGES_ORIGIN = "https://tshrestha.github.io"

DEFAULT_ALLOWED_ORIGINS = (LOCALHOST_ORIGIN, GITHUB_PAGES_ORIGIN)

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_METHODS = "Access-Control-Allow-Methods"


class CORSPolicy:
    """Reflects allow-listed origins and answers preflight requests."""

    def __init__(self, allowed_origins: Iterable[str] = DEFAULT_ALLOWED_ORIGINS):
        self.allowed_origins: FrozenSet[str] = frozenset(allowed_origins)

    def is_allowed(self, origin: Optional[str]) -> bool:
        return origin is not None and origin in self.allowed_origins

    def headers_for(self, origin: Optional[str]) -> Dict[str, str]:
        """CORS headers for a response to ``origin``."""
        headers = {
            ALLOW_HEADERS: "*",
            ALLOW_METHODS: "*",
        }
        if self.is_allowed(origin):
            headers[ALLOW_ORIGIN] = origin
        return headers

    def is_preflight(self, request: GatewayRequest) -> bool:
        return request.method == "OPTIONS" and self.is_allowed(request.origin)

    def preflight_response(self, request: GatewayRequest) -> GatewayResponse:
        return GatewayResponse(status_code=200, body="", headers=self.headers_for(request.origin))
