"""Cache protocols.

Backends store opaque string values under string keys with an optional TTL.
Serialization is the caller's concern.
"""

from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable


class CacheBackendType(str, Enum):
    """Supported cache backends."""
    MEMORY = "memory"
    REDIS = "redis"


@runtime_checkable
class CacheBackend(Protocol):
    """Protocol for cache backend adapters."""

    async def connect(self) -> None:
        """Open connections or start background work."""
        ...

    async def disconnect(self) -> None:
        """Release resources."""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Get value by key, None if absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Set value with optional TTL in seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        ...

    async def delete_many(self, keys: List[str]) -> int:
        """Delete several keys and return how many existed."""
        ...

    async def clear(self, prefix: Optional[str] = None) -> int:
        """Delete every key, or every key starting with prefix."""
        ...

    async def health_check(self) -> bool:
        """Check backend health."""
        ...
