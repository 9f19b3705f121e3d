"""
Cache warming for frequently requested geocoding queries.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Union

from shared.logging import get_logger

from ..domain.orchestrator import CacheAsideOrchestrator
from ..models import ForwardQuery, Query, ReverseQuery


def load_warm_plan(path: Union[str, Path]) -> List[Query]:
    """Load queries from a JSON file.

    Expected shape::

        {"forward": ["Seattle", "Portland"],
         "reverse": [{"lat": "47.6", "lon": "-122.3"}]}
    """
    data = json.loads(Path(path).read_text())
    queries: List[Query] = [ForwardQuery(str(text)) for text in data.get("forward", [])]
    for entry in data.get("reverse", []):
        queries.append(ReverseQuery(str(entry["lat"]), str(entry["lon"])))
    return queries


class CacheWarmer:
    """Pre-populate the cache by running queries through the orchestrator."""

    def __init__(self, orchestrator: CacheAsideOrchestrator, concurrency: int = 5):
        self.orchestrator = orchestrator
        self.logger = get_logger("geocoding.cache_warmer")
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    async def warm(self, queries: List[Query], *, dry_run: bool = False) -> Dict[str, Any]:
        """Warm every query and return a summary of hits, fills and errors.

        In dry-run mode only cache lookups are made and misses are counted.
        """
        summary: Dict[str, Any] = {
            "planned": len(queries),
            "hits": 0,
            "populated": 0,
            "misses": 0,
            "errors": [],
        }

        results = await asyncio.gather(*(self._warm_one(query, dry_run) for query in queries))
        for result, error in results:
            if result == "error":
                summary["errors"].append(error)
            else:
                summary[result] += 1

        self.logger.info(
            "Cache warm completed",
            planned=summary["planned"],
            hits=summary["hits"],
            populated=summary["populated"],
            misses=summary["misses"],
            errors=len(summary["errors"]),
        )
        return summary

    async def _warm_one(self, query: Query, dry_run: bool):
        async with self._semaphore:
            if await self.orchestrator.lookup(query) is not None:
                return "hits", None
            if dry_run:
                return "misses", None

            response = await self.orchestrator.populate(query)
            if response.status_code == 200:
                return "populated", None

            key = self.orchestrator.cache_key(query)
            self.logger.error("Failed to warm cache entry", key=key, error=response.body)
            return "error", f"{key}: {response.body}"
