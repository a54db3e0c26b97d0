"""TTL-bound session store with a per-party index."""

import json
import logging
from typing import List, Optional

from ....core.exceptions.infrastructure import CacheError, CacheSerializationError
from ...cache.services.cache_service import CacheService
from ..entities.session_context import SessionContext

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"
PARTY_INDEX_PREFIX = "party:"


class SessionCache:
    """Stores serialized sessions keyed by session id.

    Every ``get`` deserializes a fresh value, so callers never share state.
    Each stored session id is also recorded in an index for its party, which
    lets ``evict_party`` drop one customer's sessions without a global clear.

    With ``fail_open`` (the default) backend failures are logged and behave
    like a miss or a no-op; otherwise they raise ``CacheError``.
    """

    def __init__(self, cache_service: CacheService, fail_open: bool = True):
        self.cache = cache_service
        self.fail_open = fail_open

    def _session_key(self, session_id: str) -> str:
        return f"{SESSION_KEY_PREFIX}{session_id}"

    def _party_key(self, party_id: str) -> str:
        return f"{PARTY_INDEX_PREFIX}{party_id}"

    def _handle_failure(self, operation: str, key: str, error: Exception) -> None:
        if not self.fail_open:
            if isinstance(error, CacheError):
                raise error
            raise CacheError(f"Session cache {operation} failed for {key}: {error}") from error
        logger.warning(f"Session cache {operation} failed for {key}, continuing: {error}")

    async def get(self, session_id: str) -> Optional[SessionContext]:
        key = self._session_key(session_id)
        try:
            raw = await self.cache.get(key)
            if raw is None:
                return None
            return self._deserialize(raw)
        except (CacheError, OSError) as e:
            self._handle_failure("get", key, e)
            return None

    async def put(self, session: SessionContext, ttl: int) -> None:
        if not session.session_id:
            raise ValueError("Cannot cache a session without a session id")

        key = self._session_key(session.session_id)
        try:
            await self.cache.set(key, json.dumps(session.to_dict()), ttl)
            await self._index_session(session.party_id, session.session_id, ttl)
            logger.debug(f"Cached session {session.session_id} with TTL {ttl}")
        except (CacheError, OSError) as e:
            self._handle_failure("put", key, e)

    async def evict(self, session_id: str) -> bool:
        key = self._session_key(session_id)
        try:
            return await self.cache.delete(key)
        except (CacheError, OSError) as e:
            self._handle_failure("evict", key, e)
            return False

    async def evict_party(self, party_id: str) -> int:
        """Evict every indexed session of one party; returns how many existed."""
        index_key = self._party_key(party_id)
        try:
            session_ids = await self._read_index(index_key)
            evicted = 0
            if session_ids:
                evicted = await self.cache.delete_many([self._session_key(sid) for sid in session_ids])
            await self.cache.delete(index_key)
            return evicted
        except (CacheError, OSError) as e:
            self._handle_failure("evict_party", index_key, e)
            return 0

    async def clear(self) -> int:
        """Evict every session of every party."""
        try:
            return await self.cache.clear_namespace()
        except (CacheError, OSError) as e:
            self._handle_failure("clear", "*", e)
            return 0

    async def _index_session(self, party_id: str, session_id: str, ttl: int) -> None:
        # Read-modify-write: concurrent writers for one party may drop an entry
        index_key = self._party_key(party_id)
        session_ids = await self._read_index(index_key)
        if session_id not in session_ids:
            session_ids.append(session_id)
        await self.cache.set(index_key, json.dumps(session_ids), ttl)

    async def _read_index(self, index_key: str) -> List[str]:
        raw = await self.cache.get(index_key)
        if not raw:
            return []
        try:
            value = json.loads(raw)
        except ValueError as e:
            raise CacheSerializationError(f"Corrupt party index {index_key}") from e
        return [str(item) for item in value] if isinstance(value, list) else []

    @staticmethod
    def _deserialize(raw: str) -> SessionContext:
        try:
            return SessionContext.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise CacheSerializationError(f"Corrupt cached session: {e}") from e
