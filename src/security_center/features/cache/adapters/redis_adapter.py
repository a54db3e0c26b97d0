"""Redis cache backend adapter."""

import logging
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....core.exceptions.infrastructure import CacheConnectionError, CacheError

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend adapter built on ``redis.asyncio``."""

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        password: Optional[str] = None,
        db: int = 0,
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.password = password
        self.db = db
        self.redis_client: Optional[redis.Redis] = client
        self._connected = client is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._connected:
            return

        try:
            self.redis_client = redis.from_url(
                self.url,
                password=self.password,
                db=self.db,
                decode_responses=True,
            )
            await self.redis_client.ping()
            self._connected = True
            logger.info(f"Connected to Redis db={self.db}")

        except (RedisError, OSError) as e:
            raise CacheConnectionError(f"Failed to connect to Redis: {e}") from e

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def get(self, key: str) -> Optional[str]:
        """Get value by key."""
        await self._ensure_connected()

        try:
            result = await self.redis_client.get(key)
            if isinstance(result, bytes):
                return result.decode("utf-8")
            return result
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}") from e

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Set key-value pair with optional TTL."""
        await self._ensure_connected()

        try:
            await self.redis_client.set(key, value, ex=ttl if ttl and ttl > 0 else None)
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        await self._ensure_connected()

        try:
            return await self.redis_client.delete(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}") from e

    async def delete_many(self, keys: List[str]) -> int:
        """Delete several keys."""
        if not keys:
            return 0
        await self._ensure_connected()

        try:
            return await self.redis_client.delete(*keys)
        except RedisError as e:
            raise CacheError(f"Redis delete error: {e}") from e

    async def clear(self, prefix: Optional[str] = None) -> int:
        """Delete keys under a prefix, or flush the database."""
        await self._ensure_connected()

        try:
            if prefix is None:
                count = await self.redis_client.dbsize()
                await self.redis_client.flushdb()
                return count

            # Incremental SCAN, deleted in batches of 500
            deleted = 0
            batch: List[str] = []
            async for key in self.redis_client.scan_iter(match=f"{prefix}*", count=500):
                batch.append(key)
                if len(batch) >= 500:
                    deleted += await self.redis_client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.redis_client.delete(*batch)
            return deleted

        except RedisError as e:
            raise CacheError(f"Redis clear error: {e}") from e

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            await self._ensure_connected()
            return bool(await self.redis_client.ping())
        except (CacheError, RedisError) as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def _ensure_connected(self) -> None:
        if not self._connected:
            await self.connect()
