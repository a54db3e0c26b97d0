"""Infrastructure exceptions: cache, downstream services and configuration."""

from .base import SecurityCenterError


# Cache Errors
class CacheError(SecurityCenterError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when cache connection fails."""
    pass


class CacheSerializationError(CacheError):
    """Raised when a cached value cannot be serialized or deserialized."""
    pass


# Downstream Errors
class DownstreamServiceError(SecurityCenterError):
    """Raised when a downstream service fails, times out or is unreachable."""
    pass


class ResourceNotFoundError(DownstreamServiceError):
    """Raised when a downstream service reports the resource does not exist."""
    pass


# Configuration Errors
class ConfigurationError(SecurityCenterError):
    """Raised when the application is misconfigured."""
    pass
