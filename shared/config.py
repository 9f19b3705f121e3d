"""
Shared configuration management for the geocoding gateway.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Cache backend
    db_address: str = Field(default="localhost:6379")
    db_username: Optional[str] = Field(default=None)
    db_password: Optional[str] = Field(default=None)
    db_index: int = Field(default=0)
    db_socket_timeout_seconds: float = Field(default=5.0)

    # Upstream provider
    mapbox_access_token: str = Field(default="")
    mapbox_base_url: str = Field(default="https://api.mapbox.com/search/geocode/v6")
    mapbox_country: str = Field(default="us")
    mapbox_types: str = Field(default="place")
    upstream_origin: str = Field(default="https://tshrestha.github.io")
    upstream_referer: str = Field(default="https://tshrestha.github.io/nawa")

    # Outbound HTTP pool
    request_timeout_seconds: float = Field(default=10.0)
    http_max_idle_connections: int = Field(default=100)
    http_max_idle_connections_per_host: int = Field(default=20)
    http_idle_connection_timeout_seconds: float = Field(default=900.0)

    # Caching
    cache_ttl_hours: int = Field(default=200)
    reverse_cache_key_separator: str = Field(default="")

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_ttl_hours * 3600


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
