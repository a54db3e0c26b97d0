"""Cache service over a pluggable backend."""

import logging
from typing import Any, Dict, List, Optional

from ....core.exceptions.infrastructure import CacheError, ConfigurationError
from ..adapters.memory_adapter import MemoryAdapter
from ..adapters.redis_adapter import RedisAdapter
from ..entities.protocols import CacheBackend, CacheBackendType

logger = logging.getLogger(__name__)


class CacheService:
    """Namespaced cache service for Redis and in-memory backends.

    Every key is stored under ``namespace:`` so several users can share one
    backend without colliding.
    """

    def __init__(self, backend: CacheBackend, namespace: str = ""):
        self.backend = backend
        self.namespace = namespace
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the cache service."""
        if self._initialized:
            return

        try:
            await self.backend.connect()
            self._initialized = True
            logger.info("Cache service initialized successfully")

        except CacheError:
            raise
        except Exception as e:
            raise CacheError(f"Failed to initialize cache service: {e}") from e

    async def shutdown(self) -> None:
        """Shutdown the cache service."""
        if not self._initialized:
            return

        try:
            await self.backend.disconnect()
            logger.info("Cache service shutdown completed")
        except Exception as e:
            logger.error(f"Error during cache service shutdown: {e}")
        finally:
            self._initialized = False

    def make_key(self, key: str) -> str:
        """Build the namespaced key."""
        if not self.namespace:
            return key
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[str]:
        """Get value from cache."""
        if not self._initialized:
            await self.initialize()
        return await self.backend.get(self.make_key(key))

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Set value in cache."""
        if not self._initialized:
            await self.initialize()
        await self.backend.set(self.make_key(key), value, ttl)

    async def delete(self, key: str) -> bool:
        """Delete value from cache."""
        if not self._initialized:
            await self.initialize()
        return await self.backend.delete(self.make_key(key))

    async def delete_many(self, keys: List[str]) -> int:
        """Delete several values from cache."""
        if not self._initialized:
            await self.initialize()
        return await self.backend.delete_many([self.make_key(key) for key in keys])

    async def clear_namespace(self, sub_prefix: str = "") -> int:
        """Delete every key of this namespace, optionally under a sub-prefix."""
        if not self._initialized:
            await self.initialize()
        prefix = self.make_key(sub_prefix) if self.namespace else sub_prefix
        return await self.backend.clear(prefix or None)

    async def health_check(self) -> Dict[str, Any]:
        """Get cache health status."""
        try:
            if not self._initialized:
                return {"healthy": False, "error": "Cache not initialized"}

            healthy = await self.backend.health_check()
            return {"healthy": healthy}

        except Exception as e:
            logger.error(f"Cache health check failed: {e}")
            return {"healthy": False, "error": str(e)}


def create_cache_backend(
    backend_type: str,
    redis_url: str = "redis://localhost:6379",
    redis_password: Optional[str] = None,
    redis_db: int = 0,
    memory_max_size: int = 10000,
) -> CacheBackend:
    """Create the cache backend selected by configuration."""
    try:
        selected = CacheBackendType(backend_type)
    except ValueError as e:
        raise ConfigurationError(
            f"Unsupported cache backend: {backend_type}",
            details={"supported": [b.value for b in CacheBackendType]},
        ) from e

    if selected is CacheBackendType.REDIS:
        return RedisAdapter(url=redis_url, password=redis_password, db=redis_db)
    return MemoryAdapter(max_size=memory_max_size)
