#!/usr/bin/env python3
"""
Warm the Redis cache for frequently requested geocoding queries.

Loads a JSON list of forward queries and reverse coordinate pairs and runs
each one through the gateway's cache-aside orchestrator, so the first real
request for those places is served from cache.
"""

import argparse
import asyncio
import json
from pathlib import Path
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.config import get_config  # noqa: E402
from shared.logging import configure_logging  # noqa: E402
from service_geocoding.app.caching.warmer import CacheWarmer, load_warm_plan  # noqa: E402
from service_geocoding.app.gateway import create_gateway  # noqa: E402


async def warm(*, queries_path: Path, concurrency: int, dry_run: bool) -> dict:
    """Execute cache warming and return the summary."""
    config = get_config("geocoding", 8000)
    configure_logging("geocoding", config.log_level)
    gateway = create_gateway(config)
    try:
        warmer = CacheWarmer(gateway.orchestrator, concurrency=concurrency)
        return await warmer.warm(load_warm_plan(queries_path), dry_run=dry_run)
    finally:
        await gateway.close()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Warm the geocoding cache for hot queries.")
    parser.add_argument("queries_file", type=Path, help="JSON file with 'forward' and 'reverse' queries")
    parser.add_argument("--concurrency", type=int, default=5, help="Concurrent warm operations")
    parser.add_argument("--dry-run", action="store_true", help="Only look up the cache; never call the provider")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write JSON summary")
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    try:
        summary = asyncio.run(
            warm(queries_path=args.queries_file, concurrency=args.concurrency, dry_run=args.dry_run)
        )
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover - CLI surface
        print(f"[cache-warm] failed: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        print("[cache-warm] DRY RUN - no provider calls or cache writes executed")

    print(json.dumps(summary, indent=2))

    if args.output:
        args.output.write_text(json.dumps(summary, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
