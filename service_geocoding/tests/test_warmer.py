"""
Unit tests for cache warming.
"""

import json

import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_geocoding.app.caching.warmer import CacheWarmer, load_warm_plan
from service_geocoding.app.domain.orchestrator import CacheAsideOrchestrator
from service_geocoding.app.models import ForwardQuery, ReverseQuery


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "hot_queries.json"
    path.write_text(json.dumps({
        "forward": ["Seattle", "Portland"],
        "reverse": [{"lat": "47.6", "lon": "-122.3"}, {"lat": 45.5, "lon": -122.7}],
    }))
    return path


def test_load_warm_plan(plan_file):
    queries = load_warm_plan(plan_file)

    assert queries == [
        ForwardQuery("Seattle"),
        ForwardQuery("Portland"),
        ReverseQuery("47.6", "-122.3"),
        ReverseQuery("45.5", "-122.7"),
    ]


def test_load_warm_plan_sections_optional(tmp_path):
    path = tmp_path / "forward_only.json"
    path.write_text(json.dumps({"forward": ["Seattle"]}))

    assert load_warm_plan(path) == [ForwardQuery("Seattle")]


class TestCacheWarmer:
    """Test cases for CacheWarmer."""

    @pytest.mark.asyncio
    async def test_warm_populates_misses_and_counts_hits(self, cache_store, ok_provider, provider_requests):
        await cache_store.set("Seattle", "{}", 60)
        warmer = CacheWarmer(CacheAsideOrchestrator(cache_store, ok_provider), concurrency=2)

        summary = await warmer.warm([ForwardQuery("Seattle"), ForwardQuery("Portland"), ReverseQuery("1", "2")])

        assert summary == {"planned": 3, "hits": 1, "populated": 2, "misses": 0, "errors": []}
        assert len(provider_requests) == 2
        assert await cache_store.get("Portland") is not None
        assert await cache_store.get("12") is not None

    @pytest.mark.asyncio
    async def test_dry_run_never_calls_provider(self, cache_store, ok_provider, provider_requests):
        warmer = CacheWarmer(CacheAsideOrchestrator(cache_store, ok_provider))

        summary = await warmer.warm([ForwardQuery("Seattle")], dry_run=True)

        assert summary["misses"] == 1
        assert summary["populated"] == 0
        assert provider_requests == []
        assert await cache_store.get("Seattle") is None

    @pytest.mark.asyncio
    async def test_provider_errors_are_reported(self, cache_store, make_provider):
        provider = make_provider(lambda request: httpx.Response(429))
        warmer = CacheWarmer(CacheAsideOrchestrator(cache_store, provider))

        summary = await warmer.warm([ForwardQuery("Seattle")])

        assert summary["populated"] == 0
        assert summary["errors"] == ["Seattle: received unexpected status code 429"]
