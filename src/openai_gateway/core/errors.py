"""
Gateway error types.
"""

from typing import Optional


class GatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str, gateway: str = None):
        self.message = message
        self.gateway = gateway
        super().__init__(message)


class ConfigurationError(GatewayError):
    """Raised when required configuration is missing or invalid."""
    pass


class TransportError(GatewayError):
    """Raised when the provider cannot be reached (DNS, connect, reset, timeout)."""
    pass


class HttpStatusError(GatewayError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        gateway: str = None,
        status_code: int = 0,
        body: Optional[str] = None,
    ):
        super().__init__(message, gateway)
        self.status_code = status_code
        self.body = body


class GatewayAuthenticationError(HttpStatusError):
    """Raised when the provider rejects the credential."""
    pass


class GatewayRateLimitError(HttpStatusError):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str,
        gateway: str = None,
        status_code: int = 429,
        body: Optional[str] = None,
        retry_after: float = None,
    ):
        super().__init__(message, gateway, status_code=status_code, body=body)
        self.retry_after = retry_after


class DecodeError(GatewayError):
    """Raised when a provider body is not JSON or lacks the expected fields."""
    pass
