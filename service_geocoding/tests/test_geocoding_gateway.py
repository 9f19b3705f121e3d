"""
Unit tests for GeocodingGateway request handling.
"""

import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_geocoding.app.domain.orchestrator import CacheAsideOrchestrator
from service_geocoding.app.gateway import GeocodingGateway, create_gateway
from service_geocoding.app.models import GatewayRequest
from shared.config import get_config
from shared.logging import request_id_var

LOCALHOST = {"Origin": "http://localhost:3000"}


class TestGeocodingGateway:
    """Test cases for GeocodingGateway."""

    @pytest.mark.asyncio
    async def test_forward_search(self, gateway, provider_requests, seattle_body):
        response = await gateway.handle(GatewayRequest("GET", "/x/forward", {"q": "Seattle"}, LOCALHOST))

        assert response.status_code == 200
        assert response.body == seattle_body
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
        assert httpx.URL(str(provider_requests[0].url)).params["q"] == "Seattle"

    @pytest.mark.asyncio
    async def test_reverse_search(self, gateway, provider_requests):
        response = await gateway.handle(
            GatewayRequest("GET", "/x/reverse", {"lat": "47.6", "lon": "-122.3"}, LOCALHOST)
        )

        assert response.status_code == 200
        sent = provider_requests[0].url
        assert sent.path.endswith("/reverse")
        assert sent.params["latitude"] == "47.6"
        assert sent.params["longitude"] == "-122.3"

    @pytest.mark.asyncio
    async def test_cached_response_has_cors_headers(self, gateway, cache_store):
        await cache_store.set("Seattle", '{"cached": true}', 60)

        response = await gateway.handle(GatewayRequest("GET", "/x/forward", {"q": "Seattle"}, LOCALHOST))

        assert response.body == '{"cached": true}'
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_unknown_origin_gets_wildcards_only(self, gateway):
        response = await gateway.handle(
            GatewayRequest("GET", "/x/forward", {"q": "Seattle"}, {"Origin": "https://evil.example"})
        )

        assert response.status_code == 200
        assert "Access-Control-Allow-Origin" not in response.headers
        assert response.headers["Access-Control-Allow-Headers"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "*"

    @pytest.mark.asyncio
    async def test_preflight_short_circuits(self, gateway, provider_requests):
        response = await gateway.handle(
            GatewayRequest("OPTIONS", "/x/unknown", headers={"Origin": "https://tshrestha.github.io"})
        )

        assert response.status_code == 200
        assert response.body == ""
        assert response.headers == {
            "Access-Control-Allow-Origin": "https://tshrestha.github.io",
            "Access-Control-Allow-Headers": "*",
            "Access-Control-Allow-Methods": "*",
        }
        assert provider_requests == []

    @pytest.mark.asyncio
    async def test_preflight_from_unknown_origin_is_rejected(self, gateway):
        """OPTIONS without an allowed origin is just a wrong method."""
        response = await gateway.handle(
            GatewayRequest("OPTIONS", "/x/forward", headers={"Origin": "https://evil.example"})
        )

        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_get_from_second_origin_is_not_a_preflight(self, gateway, seattle_body):
        """A GET from an allowed origin still reaches the router."""
        response = await gateway.handle(
            GatewayRequest("GET", "/x/forward", {"q": "Seattle"}, {"Origin": "https://tshrestha.github.io"})
        )

        assert response.status_code == 200
        assert response.body == seattle_body

    @pytest.mark.asyncio
    async def test_unknown_path(self, gateway):
        response = await gateway.handle(GatewayRequest("GET", "/x/unknown", headers=LOCALHOST))

        assert response.status_code == 404
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_wrong_method(self, gateway, provider_requests):
        response = await gateway.handle(GatewayRequest("POST", "/x/forward", {"q": "Seattle"}))

        assert response.status_code == 405
        assert provider_requests == []

    @pytest.mark.asyncio
    async def test_missing_parameter(self, gateway):
        response = await gateway.handle(GatewayRequest("GET", "/x/reverse", {"lat": "47.6"}))

        assert response.status_code == 400
        assert "lon" in response.body

    @pytest.mark.asyncio
    async def test_upstream_failure(self, cache_store, make_provider):
        provider = make_provider(lambda request: httpx.Response(503))
        gateway = GeocodingGateway(CacheAsideOrchestrator(cache_store, provider))

        response = await gateway.handle(GatewayRequest("GET", "/x/forward", {"q": "Seattle"}, LOCALHOST))

        assert response.status_code == 500
        assert "503" in response.body
        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_request_context_is_cleared(self, gateway):
        await gateway.handle(GatewayRequest("GET", "/x/unknown", request_id="req-123"))

        assert request_id_var.get() is None

    @pytest.mark.asyncio
    async def test_close(self, gateway):
        await gateway.close()

        assert gateway.orchestrator.provider.http.is_closed


class TestCreateGateway:
    """Process-wide client construction from configuration."""

    def test_create_gateway_from_config(self, monkeypatch):
        monkeypatch.setenv("DB_ADDRESS", "cache.internal:6380")
        monkeypatch.setenv("DB_USERNAME", "svc")
        monkeypatch.setenv("DB_PASSWORD", "secret")
        monkeypatch.setenv("MAPBOX_ACCESS_TOKEN", "pk.test")
        monkeypatch.setenv("CACHE_TTL_HOURS", "2")
        monkeypatch.setenv("REVERSE_CACHE_KEY_SEPARATOR", ",")

        gateway = create_gateway(get_config("geocoding", 8000))

        orchestrator = gateway.orchestrator
        assert orchestrator.ttl_seconds == 7200
        assert orchestrator.reverse_key_separator == ","
        assert orchestrator.provider.access_token == "pk.test"
        kwargs = orchestrator.cache.redis.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["username"] == "svc"

    def test_defaults(self, monkeypatch):
        for name in ("CACHE_TTL_HOURS", "REVERSE_CACHE_KEY_SEPARATOR", "REQUEST_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        config = get_config("geocoding", 8000)

        assert config.cache_ttl_seconds == 200 * 3600
        assert config.reverse_cache_key_separator == ""
        assert config.request_timeout_seconds == 10.0
        assert config.http_max_idle_connections == 100
        assert config.http_max_idle_connections_per_host == 20
        assert config.http_idle_connection_timeout_seconds == 900.0
