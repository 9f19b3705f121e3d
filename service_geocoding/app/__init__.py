"""
Geocoding gateway service package.

The gateway fronts the Mapbox place-search API, serving repeated forward and
reverse queries from Redis and shaping every answer with the same CORS policy.

Structure:
- app.main: FastAPI app and catch-all route wiring.
- app.handler: Serverless (API Gateway proxy) entrypoint.
- app.gateway: Request handling and process-wide client construction.
- app.adapters: HTTP client for the upstream provider.
- app.caching: Redis cache store.
- app.domain: Origin policy, routing and cache-aside orchestration.
"""
