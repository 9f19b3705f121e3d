"""
Serverless entrypoint for the geocoding gateway.

The gateway and its pooled clients are built on the first invocation and kept
for the life of the process. All invocations run on one module-level event
loop so the async connection pools stay bound to a live loop between calls.
"""

import asyncio
from typing import Any, Dict, Optional

from shared.config import get_config
from shared.logging import bind_invocation, clear_context, configure_logging

from .gateway import GeocodingGateway, create_gateway
from .models import GatewayRequest

_loop = asyncio.new_event_loop()
_gateway: Optional[GeocodingGateway] = None


def get_gateway() -> GeocodingGateway:
    global _gateway
    if _gateway is None:
        config = get_config("geocoding", 8000)
        configure_logging("geocoding", config.log_level)
        _gateway = create_gateway(config)
    return _gateway


def set_gateway(gateway: Optional[GeocodingGateway]) -> None:
    """Replace the process-wide gateway (used by tests and warm starts)."""
    global _gateway
    _gateway = gateway


def lambda_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Handle an API Gateway proxy event."""
    bind_invocation(event, context)
    try:
        request = GatewayRequest.from_proxy_event(event)
        response = _loop.run_until_complete(get_gateway().handle(request))
    finally:
        clear_context()
    return response.to_proxy_response()
