"""Authentication-specific exceptions."""

from .base import SecurityCenterError


class AuthenticationError(SecurityCenterError):
    """Base exception for authentication errors."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when authentication credentials are invalid."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when an access, refresh or id token is invalid."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""
    pass


class IdentityNotFoundError(AuthenticationError):
    """Raised when an authenticated principal maps to no customer record."""
    pass


class IdpConnectionError(SecurityCenterError):
    """Raised when the identity provider cannot be reached."""
    pass


class IdpOperationError(SecurityCenterError):
    """Raised when an administrative IDP operation fails."""
    pass
