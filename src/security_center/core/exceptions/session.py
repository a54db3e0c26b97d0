"""Session and customer-resolution exceptions."""

from .base import SecurityCenterError


class SessionError(SecurityCenterError):
    """Base exception for session errors."""
    pass


class SessionNotFoundError(SessionError):
    """Raised when a session cannot be found or rebuilt."""
    pass


class InvalidSessionIdError(SessionError):
    """Raised when a session identifier is malformed or not trusted."""
    pass


class MissingPartyIdError(SessionError):
    """Raised when the request carries no party identifier."""
    pass


class InvalidPartyIdError(SessionError):
    """Raised when the party identifier is not a valid UUID."""
    pass


class CustomerResolutionError(SessionError):
    """Raised when a customer profile cannot be turned into customer info."""
    pass
