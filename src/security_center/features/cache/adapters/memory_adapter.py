"""In-process cache backend adapter."""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with expiry metadata."""
    value: str
    created_at: float
    expires_at: Optional[float] = None
    access_count: int = 0
    last_accessed: float = field(default_factory=time.time)

    def is_expired(self, now: float) -> bool:
        """Check if entry is expired at the given time."""
        if self.expires_at is None:
            return False
        return now >= self.expires_at


class MemoryAdapter:
    """Memory cache backend with LRU eviction and lazy TTL expiry.

    Expired entries are dropped when they are read, and periodically by a
    background sweep started in ``connect``.
    """

    def __init__(
        self,
        max_size: int = 10000,
        cleanup_interval: int = 60,
        time_func: Callable[[], float] = time.time,
    ):
        self.max_size = max_size
        self._cleanup_interval = cleanup_interval
        self._time = time_func

        self._store: Dict[str, MemoryCacheEntry] = {}
        self._access_order: OrderedDict[str, None] = OrderedDict()
        self._lock = asyncio.Lock()

        self._cleanup_task: Optional[asyncio.Task] = None

    async def connect(self) -> None:
        """Start the background cleanup task."""
        if self._cleanup_task is None:
            self._cleanup_task = asyncio.create_task(self._background_cleanup())
        logger.info(f"Memory cache initialized with max_size={self.max_size}")

    async def disconnect(self) -> None:
        """Stop background work and drop every entry."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        async with self._lock:
            self._store.clear()
            self._access_order.clear()

    async def get(self, key: str) -> Optional[str]:
        """Get value by key."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            now = self._time()
            if entry.is_expired(now):
                self._remove_entry(key)
                return None

            entry.access_count += 1
            entry.last_accessed = now
            self._access_order.move_to_end(key)
            return entry.value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a value, evicting the least recently used entry when full."""
        async with self._lock:
            now = self._time()
            if key in self._store:
                self._remove_entry(key)

            # Make room before inserting
            while len(self._store) >= self.max_size and self._access_order:
                self._remove_entry(next(iter(self._access_order)))

            self._store[key] = MemoryCacheEntry(
                value=value,
                created_at=now,
                expires_at=now + ttl if ttl and ttl > 0 else None,
                last_accessed=now,
            )
            self._access_order[key] = None

    async def delete(self, key: str) -> bool:
        """Remove one key; True when something was removed."""
        async with self._lock:
            if key in self._store:
                self._remove_entry(key)
                return True
            return False

    async def delete_many(self, keys: List[str]) -> int:
        """Delete several keys."""
        async with self._lock:
            deleted = 0
            for key in keys:
                if key in self._store:
                    self._remove_entry(key)
                    deleted += 1
            return deleted

    async def clear(self, prefix: Optional[str] = None) -> int:
        """Clear all entries, or only those under a prefix."""
        async with self._lock:
            if prefix is None:
                count = len(self._store)
                self._store.clear()
                self._access_order.clear()
                return count

            keys = [key for key in self._store if key.startswith(prefix)]
            for key in keys:
                self._remove_entry(key)
            return len(keys)

    async def size(self) -> int:
        """Get number of live entries."""
        async with self._lock:
            self._cleanup_expired()
            return len(self._store)

    async def health_check(self) -> bool:
        """In-process store, always reachable."""
        async with self._lock:
            return True

    def _remove_entry(self, key: str) -> None:
        self._store.pop(key, None)
        self._access_order.pop(key, None)

    def _cleanup_expired(self) -> None:
        now = self._time()
        expired_keys = [key for key, entry in self._store.items() if entry.is_expired(now)]
        for key in expired_keys:
            self._remove_entry(key)

    async def _background_cleanup(self) -> None:
        """Periodically drop entries whose TTL has lapsed."""
        while True:
            try:
                await asyncio.sleep(self._cleanup_interval)
                async with self._lock:
                    self._cleanup_expired()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Error in background cleanup: {e}")
