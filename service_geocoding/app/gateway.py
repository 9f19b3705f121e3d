"""
Request handling for the geocoding gateway.
"""

from typing import Optional, TYPE_CHECKING

from shared.logging import clear_context, get_logger, set_request_id

from .adapters.mapbox_client import MapboxClient
from .caching.cache_store import RedisCacheStore
from .domain.cors import CORSPolicy
from .domain.orchestrator import CacheAsideOrchestrator
from .domain.router import QueryRouter
from .models import GatewayRequest, GatewayResponse, RouteOutcome

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.config import BaseConfig
    from shared.metrics import MetricsCollector


_REJECTIONS = {
    RouteOutcome.NOT_FOUND: 404,
    RouteOutcome.METHOD_NOT_ALLOWED: 405,
    RouteOutcome.BAD_REQUEST: 400,
}


class GeocodingGateway:
    """Compose origin policy, routing and cache-aside orchestration."""

    def __init__(
        self,
        orchestrator: CacheAsideOrchestrator,
        cors: Optional[CORSPolicy] = None,
        router: Optional[QueryRouter] = None,
    ):
        self.orchestrator = orchestrator
        self.cors = cors or CORSPolicy()
        self.router = router or QueryRouter()
        self.logger = get_logger("geocoding.gateway")

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        set_request_id(request.request_id)
        try:
            return await self._dispatch(request)
        finally:
            clear_context()

    async def _dispatch(self, request: GatewayRequest) -> GatewayResponse:
        self.logger.info("Received request", method=request.method, path=request.path)

        if self.cors.is_preflight(request):
            return self.cors.preflight_response(request)

        route = self.router.route(request)
        if route.outcome is RouteOutcome.OK:
            response = await self.orchestrator.execute(route.query)
        else:
            self.logger.info(
                "Rejected request",
                method=request.method,
                path=request.path,
                outcome=route.outcome.value,
            )
            response = GatewayResponse(status_code=_REJECTIONS[route.outcome], body=route.message)

        response.headers.update(self.cors.headers_for(request.origin))
        return response

    async def close(self):
        """Shut down the shared cache and provider clients."""
        await self.orchestrator.cache.close()
        await self.orchestrator.provider.close()


def create_gateway(config: "BaseConfig", metrics: Optional["MetricsCollector"] = None) -> GeocodingGateway:
    """Build the process-wide clients and the gateway from configuration."""
    cache = RedisCacheStore.from_address(
        config.db_address,
        username=config.db_username,
        password=config.db_password,
        db=config.db_index,
        socket_timeout=config.db_socket_timeout_seconds,
    )
    provider = MapboxClient(
        config.mapbox_access_token,
        base_url=config.mapbox_base_url,
        country=config.mapbox_country,
        place_types=config.mapbox_types,
        origin=config.upstream_origin,
        referer=config.upstream_referer,
        timeout=config.request_timeout_seconds,
        max_idle_connections=config.http_max_idle_connections,
        max_idle_connections_per_host=config.http_max_idle_connections_per_host,
        idle_connection_timeout=config.http_idle_connection_timeout_seconds,
        metrics=metrics,
    )
    orchestrator = CacheAsideOrchestrator(
        cache,
        provider,
        ttl_seconds=config.cache_ttl_seconds,
        reverse_key_separator=config.reverse_cache_key_separator,
        metrics=metrics,
    )
    return GeocodingGateway(orchestrator)
