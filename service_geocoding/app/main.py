"""
Geocoding gateway service.
"""

from typing import Dict, Optional

from fastapi import Request, Response

from shared.base_service import BaseService

from .gateway import GeocodingGateway, create_gateway
from .models import GatewayRequest

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


class GeocodingService(BaseService):
    """HTTP front for the cache-aside geocoding gateway."""

    def __init__(self, gateway: Optional[GeocodingGateway] = None):
        super().__init__("geocoding", 8000)
        self.gateway = gateway or create_gateway(self.config, metrics=self.metrics)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.gateway.close()

        self._setup_gateway_routes()

        self.app.state.geocoding_service = self

    def _setup_gateway_routes(self):
        """Forward every other path to the gateway."""

        @self.app.api_route("/", methods=ALL_METHODS)
        @self.app.api_route("/{path:path}", methods=ALL_METHODS)
        async def geocode(request: Request):
            gateway_request = GatewayRequest(
                method=request.method,
                path=request.url.path,
                query_params=dict(request.query_params),
                headers=dict(request.headers),
                request_id=request.headers.get("x-request-id"),
            )
            result = await self.gateway.handle(gateway_request)
            return Response(
                content=result.body,
                status_code=result.status_code,
                headers=result.headers,
                media_type="application/json" if result.status_code == 200 and result.body else "text/plain",
            )

    async def _check_dependencies(self) -> Dict[str, str]:
        redis_ok = await self.gateway.orchestrator.cache.ping()
        return {"redis": "ok" if redis_ok else "unavailable"}


def create_app(gateway: Optional[GeocodingGateway] = None):
    """Create FastAPI application."""
    service = GeocodingService(gateway)
    return service.app


if __name__ == "__main__":
    service = GeocodingService()
    service.run()
