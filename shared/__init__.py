"""
Shared utilities for the geocoding gateway.

This package aggregates common building blocks consumed by the service,
its serverless entrypoint and the helper scripts:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- crypto: AES-GCM token encryption helpers
- base_service: FastAPI service skeleton (health, metrics, error handlers)

Do not import from service packages into shared/.
"""
