"""
Domain package for the Geocoding Service.

Exports the origin policy, query router and cache-aside orchestrator.
"""

from .cors import CORSPolicy
from .orchestrator import CacheAsideOrchestrator
from .router import QueryRouter

__all__ = ["CORSPolicy", "CacheAsideOrchestrator", "QueryRouter"]
