"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .base import SecurityCenterError
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


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidSessionIdError: 400,
    MissingPartyIdError: 400,
    InvalidPartyIdError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,
    InvalidCredentialsError: 401,
    InvalidTokenError: 401,
    TokenExpiredError: 401,
    IdentityNotFoundError: 401,

    # 404 Not Found
    SessionNotFoundError: 404,

    # 500 Internal Server Error
    SessionError: 500,
    CustomerResolutionError: 500,
    CacheError: 500,
    CacheConnectionError: 500,
    CacheSerializationError: 500,
    ConfigurationError: 500,
    IdpOperationError: 500,

    # 503 Service Unavailable
    DownstreamServiceError: 503,
    ResourceNotFoundError: 503,
    IdpConnectionError: 503,

    # Default
    SecurityCenterError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    The most specific class in the exception's MRO that has a mapping wins.
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
