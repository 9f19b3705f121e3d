"""
Shared error handling for the geocoding gateway.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class GatewayException(Exception):
    """Base exception for gateway services."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class UpstreamError(GatewayException):
    """Base class for failures talking to the upstream search provider."""

    def __init__(
        self,
        message: str = "Upstream provider error",
        code: str = "UPSTREAM_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code, message, details)


class UpstreamNetworkError(UpstreamError):
    """DNS, connect, timeout or read failure before a response was received."""

    def __init__(self, message: str = "Upstream request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UPSTREAM_NETWORK_ERROR", details)


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-success status code."""

    def __init__(self, status_code: int, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(
            f"received unexpected status code {status_code}",
            "UPSTREAM_STATUS_ERROR",
            {"status_code": status_code, **(details or {})}
        )


class UpstreamRequestError(UpstreamError):
    """Query parameters could not be turned into a provider URL."""

    def __init__(self, message: str = "Upstream request could not be built", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UPSTREAM_REQUEST_ERROR", details)


class UpstreamPayloadError(UpstreamError):
    """Upstream answered 200 with an empty or unparseable body."""

    def __init__(self, message: str = "Upstream returned an invalid body", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UPSTREAM_PAYLOAD_ERROR", details)


class EncryptionError(GatewayException):
    """Encryption or decryption failure."""

    def __init__(self, message: str = "Encryption error", details: Optional[Dict[str, Any]] = None):
        super().__init__("ENCRYPTION_ERROR", message, details)
