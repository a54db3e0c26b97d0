"""Base exceptions for the security center.

All exceptions inherit from SecurityCenterError and carry an error code and
structured details. HTTP status codes are assigned in ``http_mapping``.
"""

from typing import Any, Dict, Optional


class SecurityCenterError(Exception):
    """Base exception for all security center errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: SecurityCenterError, expose_message: bool = True) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The security center exception
        expose_message: When False the message and details are replaced by a
            generic text, used for server-side failures

    Returns:
        Error response dictionary
    """
    if not expose_message:
        return {
            "error": {
                "code": exception.error_code,
                "message": "Internal server error",
                "type": "internal_error",
            }
        }

    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
