"""
Mapbox geocoding client for the gateway.
"""

import json
import time
from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from shared.logging import get_logger
from shared.errors import (
    UpstreamNetworkError,
    UpstreamPayloadError,
    UpstreamRequestError,
    UpstreamStatusError,
)

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


DEFAULT_BASE_URL = "https://api.mapbox.com/search/geocode/v6"
DEFAULT_ORIGIN = "https://tshrestha.github.io"
DEFAULT_REFERER = "https://tshrestha.github.io/nawa"


def redact_url(url: str) -> str:
    """Mask the access token in a provider URL before it is logged."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return url.split("?", 1)[0]
    if "access_token" not in parsed.params:
        return url
    return str(parsed.copy_set_param("access_token", "REDACTED"))


class MapboxClient:
    """Client for the Mapbox Geocoding v6 forward and reverse endpoints.

    A single pooled ``httpx.AsyncClient`` is held for the lifetime of the
    process. Each call makes exactly one attempt; failures are raised as
    ``UpstreamError`` subclasses.
    """

    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        country: str = "us",
        place_types: str = "place",
        origin: str = DEFAULT_ORIGIN,
        referer: str = DEFAULT_REFERER,
        timeout: float = 10.0,
        max_idle_connections: int = 100,
        max_idle_connections_per_host: int = 20,
        idle_connection_timeout: float = 900.0,
        metrics: Optional["MetricsCollector"] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip('/')
        self.country = country
        self.place_types = place_types
        self.metrics = metrics
        self.logger = get_logger("geocoding.mapbox_client")

        # httpx has no per-host keep-alive limit; the pool serves a single host
        limits = httpx.Limits(
            max_connections=None,
            max_keepalive_connections=min(max_idle_connections, max_idle_connections_per_host),
            keepalive_expiry=idle_connection_timeout,
        )
        self.http = httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            headers={"Origin": origin, "Referer": referer},
            transport=transport,
        )

    def _build_url(self, endpoint: str, params: Dict[str, Any]) -> str:
        query = {
            "country": self.country,
            "types": self.place_types,
            "access_token": self.access_token,
        }
        query.update(params)
        try:
            return str(httpx.URL(f"{self.base_url}/{endpoint}", params=query))
        except (httpx.InvalidURL, UnicodeError) as exc:
            message = str(exc) or exc.__class__.__name__
            self.logger.error("Failed to build geocoding request", endpoint=endpoint, error=message)
            raise UpstreamRequestError(f"invalid query parameters: {message}", details={"endpoint": endpoint}) from exc

    def forward_url(self, text: str) -> str:
        """Provider URL for a free-text search."""
        return self._build_url("forward", {"q": text})

    def reverse_url(self, latitude: str, longitude: str) -> str:
        """Provider URL for a coordinate search."""
        return self._build_url("reverse", {"latitude": latitude, "longitude": longitude})

    async def fetch(self, url: str, operation: str = "search") -> str:
        """GET ``url`` and return the raw body of a successful response."""
        safe_url = redact_url(url)
        start = time.perf_counter()
        outcome = "error"

        try:
            try:
                response = await self.http.get(url)
            except httpx.InvalidURL as exc:
                self.logger.error("Invalid geocoding request URL", url=safe_url, error=str(exc))
                raise UpstreamRequestError(f"invalid request URL: {exc}", details={"url": safe_url}) from exc
            except httpx.HTTPError as exc:
                message = str(exc) or exc.__class__.__name__
                self.logger.error("Geocoding request failed", url=safe_url, error=message)
                raise UpstreamNetworkError(message, details={"url": safe_url}) from exc

            if response.status_code != 200:
                outcome = str(response.status_code)
                self.logger.error(
                    "Received unexpected status code",
                    url=safe_url,
                    status_code=response.status_code,
                    response=response.text[:500],
                )
                raise UpstreamStatusError(response.status_code, details={"url": safe_url})

            body = response.text
            if not body.strip():
                self.logger.error("Geocoding response body is empty", url=safe_url)
                raise UpstreamPayloadError("received empty response body", details={"url": safe_url})

            try:
                json.loads(body)
            except ValueError as exc:
                self.logger.error("Failed to parse geocoding result", url=safe_url, error=str(exc))
                raise UpstreamPayloadError("received malformed response body", details={"url": safe_url}) from exc

            outcome = "success"
            self.logger.debug("Geocoding request succeeded", url=safe_url)
            return body
        finally:
            self._record(operation, outcome, time.perf_counter() - start)

    def _record(self, operation: str, outcome: str, duration: float) -> None:
        if not self.metrics:
            return
        self.metrics.increment_counter("upstream_requests_total", operation=operation, outcome=outcome)
        self.metrics.observe_histogram("upstream_request_duration_seconds", duration, operation=operation)

    async def close(self):
        """Close the connection pool."""
        await self.http.aclose()
