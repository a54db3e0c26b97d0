"""Exception hierarchy for the security center."""

from .base import SecurityCenterError, create_error_response
from .auth import (
    AuthenticationError,
    IdentityNotFoundError,
    IdpConnectionError,
    IdpOperationError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
)
from .session import (
    CustomerResolutionError,
    InvalidPartyIdError,
    InvalidSessionIdError,
    MissingPartyIdError,
    SessionError,
    SessionNotFoundError,
)
from .infrastructure import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    DownstreamServiceError,
    ResourceNotFoundError,
)
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    "SecurityCenterError",
    "create_error_response",
    "get_http_status_code",
    "HTTP_STATUS_MAP",
    "AuthenticationError",
    "IdentityNotFoundError",
    "IdpConnectionError",
    "IdpOperationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "SessionError",
    "SessionNotFoundError",
    "InvalidSessionIdError",
    "MissingPartyIdError",
    "InvalidPartyIdError",
    "CustomerResolutionError",
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    "ConfigurationError",
    "DownstreamServiceError",
    "ResourceNotFoundError",
]
