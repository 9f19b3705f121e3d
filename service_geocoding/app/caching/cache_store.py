"""
Redis-backed cache store for geocoding results.
"""

from typing import Optional

import redis.asyncio as redis

from shared.logging import get_logger


class RedisCacheStore:
    """Key/value store with per-entry TTL.

    Backend failures never propagate: reads degrade to a miss and writes
    report ``False``. One instance is shared by every request in the process;
    the underlying connection pool is safe for concurrent use.
    """

    def __init__(self, client: redis.Redis):
        self.redis = client
        self.logger = get_logger("geocoding.cache_store")

    @classmethod
    def from_address(
        cls,
        address: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        db: int = 0,
        socket_timeout: float = 5.0,
    ) -> "RedisCacheStore":
        """Create a store from ``host:port`` or a ``redis://`` URL."""
        if "://" in address:
            client = redis.from_url(
                address,
                username=username,
                password=password,
                db=db,
                decode_responses=True,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout,
            )
        else:
            host, _, port = address.partition(":")
            client = redis.Redis(
                host=host or "localhost",
                port=int(port) if port else 6379,
                username=username,
                password=password,
                db=db,
                decode_responses=True,
                socket_connect_timeout=socket_timeout,
                socket_timeout=socket_timeout,
            )
        return cls(client)

    async def get(self, key: str) -> Optional[str]:
        """Return the cached value, or ``None`` on a miss or backend failure."""
        try:
            value = await self.redis.get(key)
        except Exception as e:
            self.logger.warning("Failed to retrieve query result from cache", key=key, error=str(e))
            return None

        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        try:
            await self.redis.set(key, value, ex=ttl_seconds)
            self.logger.debug("Cached query result", key=key, ttl=ttl_seconds)
            return True
        except Exception as e:
            self.logger.error("Failed to cache query result", key=key, error=str(e))
            return False

    async def ping(self) -> bool:
        """Check Redis health."""
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            self.logger.warning("Redis ping failed", error=str(e))
            return False

    async def close(self):
        """Release the connection pool."""
        await self.redis.aclose()
        self.logger.info("Redis cache closed")
