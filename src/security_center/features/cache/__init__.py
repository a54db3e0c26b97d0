"""Cache feature: backend adapters and the cache service."""

from .adapters.memory_adapter import MemoryAdapter
from .adapters.redis_adapter import RedisAdapter
from .entities.protocols import CacheBackend, CacheBackendType
from .services.cache_service import CacheService, create_cache_backend

__all__ = [
    "CacheBackend",
    "CacheBackendType",
    "CacheService",
    "MemoryAdapter",
    "RedisAdapter",
    "create_cache_backend",
]
