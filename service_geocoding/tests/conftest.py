"""
Shared fixtures for Geocoding Service tests.
"""

import json
from typing import Callable, List

import fakeredis
import fakeredis.aioredis
import httpx
import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_geocoding.app.adapters.mapbox_client import MapboxClient
from service_geocoding.app.caching.cache_store import RedisCacheStore
from service_geocoding.app.domain.orchestrator import CacheAsideOrchestrator
from service_geocoding.app.gateway import GeocodingGateway


SEATTLE_FEATURES = json.dumps({
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [-122.3301, 47.6038]},
            "properties": {"name": "Seattle", "feature_type": "place"}
        }
    ],
    "attribution": "NOTICE: © 2025 Mapbox and its suppliers."
})


@pytest.fixture
def seattle_body():
    """Raw provider body for a Seattle search."""
    return SEATTLE_FEATURES


@pytest.fixture
def fake_server():
    """Isolated fakeredis server per test."""
    return fakeredis.FakeServer()


@pytest.fixture
def cache_store(fake_server):
    """RedisCacheStore backed by fakeredis."""
    return RedisCacheStore(fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True))


@pytest.fixture
def provider_requests() -> List[httpx.Request]:
    """Requests seen by the mock provider transport."""
    return []


@pytest.fixture
def make_provider(provider_requests) -> Callable[..., MapboxClient]:
    """Build a MapboxClient whose transport is answered by ``responder``."""

    def _make(responder: Callable[[httpx.Request], httpx.Response], **kwargs) -> MapboxClient:
        def handler(request: httpx.Request) -> httpx.Response:
            provider_requests.append(request)
            return responder(request)

        return MapboxClient("test-token", transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def ok_provider(make_provider, seattle_body):
    """Provider that always answers 200 with the Seattle body."""
    return make_provider(lambda request: httpx.Response(200, text=seattle_body))


@pytest.fixture
def gateway(cache_store, ok_provider):
    """Gateway wired to fakeredis and the mock provider."""
    return GeocodingGateway(CacheAsideOrchestrator(cache_store, ok_provider))
