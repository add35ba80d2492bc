"""
Core gateway components.
"""

from .config import GatewayConfig, ProviderConfig, ServerConfig, load_config
from .errors import (
    GatewayError,
    ConfigurationError,
    TransportError,
    HttpStatusError,
    GatewayAuthenticationError,
    GatewayRateLimitError,
    DecodeError,
)
from .policy import ErrorPolicy, OPERATION_POLICIES, apply_policy, describe_error

__all__ = [
    "GatewayConfig",
    "ProviderConfig",
    "ServerConfig",
    "load_config",
    "GatewayError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "GatewayAuthenticationError",
    "GatewayRateLimitError",
    "DecodeError",
    "ErrorPolicy",
    "OPERATION_POLICIES",
    "apply_policy",
    "describe_error",
]
