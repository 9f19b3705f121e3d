"""
Cache-aside orchestration for geocoding queries.
"""

from typing import Optional, TYPE_CHECKING

from shared.errors import UpstreamError
from shared.logging import get_logger

from ..models import ForwardQuery, GatewayResponse, Query

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector
    from ..adapters.mapbox_client import MapboxClient
    from ..caching.cache_store import RedisCacheStore


DEFAULT_TTL_SECONDS = 200 * 3600


class CacheAsideOrchestrator:
    """Serve a query from cache, falling back to the provider on a miss.

    The flow for one query is CacheLookup, then on a miss ProviderCall and
    CachePopulate, then Respond. A hit never touches the provider; a provider
    failure never writes to the cache. Nothing is retried.
    """

    def __init__(
        self,
        cache: "RedisCacheStore",
        provider: "MapboxClient",
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        reverse_key_separator: str = "",
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.cache = cache
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.reverse_key_separator = reverse_key_separator
        self.metrics = metrics
        self.logger = get_logger("geocoding.orchestrator")

    def cache_key(self, query: Query) -> str:
        return query.cache_key(self.reverse_key_separator)

    def provider_url(self, query: Query) -> str:
        if isinstance(query, ForwardQuery):
            return self.provider.forward_url(query.text)
        return self.provider.reverse_url(query.latitude, query.longitude)

    async def lookup(self, query: Query) -> Optional[str]:
        """Cache lookup only; ``None`` when absent or the cache is unreachable."""
        key = self.cache_key(query)
        cached = await self.cache.get(key)
        if cached is None:
            self._count("cache_misses_total", query)
        else:
            self._count("cache_hits_total", query)
        return cached

    async def execute(self, query: Query) -> GatewayResponse:
        key = self.cache_key(query)

        cached = await self.lookup(query)
        if cached is not None:
            self.logger.info("Retrieved query result from cache", operation=query.operation, key=key)
            return GatewayResponse(status_code=200, body=cached)

        self.logger.info("HTTP request is required to fetch query results", operation=query.operation, key=key)
        return await self.populate(query)

    async def populate(self, query: Query) -> GatewayResponse:
        """Call the provider and store a successful body, skipping the lookup."""
        try:
            url = self.provider_url(query)
            body = await self.provider.fetch(url, operation=query.operation)
        except UpstreamError as exc:
            if self.metrics:
                self.metrics.record_error(exc.code)
            return GatewayResponse(status_code=500, body=exc.message)

        await self.cache.set(self.cache_key(query), body, self.ttl_seconds)
        return GatewayResponse(status_code=200, body=body)

    def _count(self, metric_name: str, query: Query) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, cache_type=query.operation)
