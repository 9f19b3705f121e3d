"""
Adapters package for the Geocoding Service.

Contains the HTTP client wrapper for the upstream place-search provider. The
adapter encapsulates base URLs, request shapes, connection pooling and the
mapping of provider failures onto shared errors.
"""

from .mapbox_client import MapboxClient

__all__ = [
    "MapboxClient",
]
