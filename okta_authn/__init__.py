"""
Okta Authn Python SDK

A Python client for the Okta Authentication API (primary authentication,
multi-factor enrollment and verification, password recovery and account
unlock) and the User Schema API.
"""

from .client import OktaClient, create_okta_client
from .authentication import Authentication
from .schema import Schema
from .transport import Transport, Request, compact
from .types import (
    OktaConfig,
    Transaction,
    TransactionStatus,
    FactorType,
    RecoveryFactorType,
    ErrorResponse,
    ErrorCause,
    UserSchema,
)
from .errors import (
    OktaError,
    OktaApiError,
    NetworkError,
    ConfigurationError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ErrorCauseIndexError,
    is_okta_error,
)

__version__ = "1.0.0"
__all__ = [
    # Client
    "OktaClient",
    "create_okta_client",
    # Resources
    "Authentication",
    "Schema",
    # Transport
    "Transport",
    "Request",
    "compact",
    # Types
    "OktaConfig",
    "Transaction",
    "TransactionStatus",
    "FactorType",
    "RecoveryFactorType",
    "ErrorResponse",
    "ErrorCause",
    "UserSchema",
    # Errors
    "OktaError",
    "OktaApiError",
    "NetworkError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ErrorCauseIndexError",
    "is_okta_error",
]
