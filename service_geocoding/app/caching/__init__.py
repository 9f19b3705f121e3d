"""
Geocoding caching package.

Provides the Redis-backed store used by the gateway to serve repeated queries
without calling the upstream provider. Entries expire after a fixed TTL.
"""
