"""Session orchestration: cache-or-build, lifecycle and authorization checks."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from ....core.exceptions.session import (
    InvalidPartyIdError,
    InvalidSessionIdError,
    MissingPartyIdError,
)
from ..entities.request_context import RequestContext
from ..entities.session_context import SessionContext, SessionStatus
from .session_aggregator import SessionAggregator
from .session_cache import SessionCache
from .session_ids import SessionIdCodec

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(minutes=30)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_party_id(party_id: Optional[str]) -> str:
    """Canonical UUID string for a party id.

    Raises:
        MissingPartyIdError: if the id is absent or blank
        InvalidPartyIdError: if the id is not a UUID
    """
    if party_id is None or not str(party_id).strip():
        raise MissingPartyIdError("Party id is required")
    try:
        return str(uuid.UUID(str(party_id).strip()))
    except ValueError as e:
        raise InvalidPartyIdError(
            "Party id must be a UUID",
            details={"party_id": str(party_id)},
        ) from e


class SessionManager:
    """Top-level session orchestrator.

    A session is served from the cache when present and ACTIVE, otherwise it
    is aggregated from the downstream registries, stamped and stored with the
    session TTL. Concurrent misses for one key both build; last write wins.
    """

    def __init__(
        self,
        aggregator: SessionAggregator,
        session_cache: SessionCache,
        session_ids: SessionIdCodec,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.aggregator = aggregator
        self.session_cache = session_cache
        self.session_ids = session_ids
        self.session_ttl = session_ttl
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return int(self.session_ttl.total_seconds())

    def now(self) -> datetime:
        return self._clock()

    # Lifecycle

    async def create_or_get(self, context: RequestContext) -> SessionContext:
        """Return the caller's session, building it on a cache miss.

        A session id supplied by the caller is reused only when it verifies
        and embeds the same party id as the request.
        """
        party_id = normalize_party_id(context.party_id)

        if context.session_id:
            session_id = self._trusted_session_id(context.session_id, party_id)
        else:
            session_id = self.session_ids.new_session_id(party_id, self.now())

        return await self._get_or_build(
            party_id,
            session_id,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            metadata=context.session_metadata(),
        )

    async def get_by_party_id(self, party_id: str) -> SessionContext:
        """Session in the party's deterministic slot, built on a miss."""
        party_id = normalize_party_id(party_id)
        session_id = self.session_ids.party_session_id(party_id)
        return await self._get_or_build(party_id, session_id)

    async def get_by_session_id(self, session_id: str) -> SessionContext:
        """Cached session as-is; on a miss, rebuild for the id's party.

        Raises:
            InvalidSessionIdError: if the id is malformed
            SessionNotFoundError: if the id is not signed by this service
        """
        cached = await self.session_cache.get(session_id)
        if cached is not None:
            return cached

        party_id = self._party_id_from_session_id(session_id)
        logger.info(f"Session {session_id} not cached, rebuilding for party {party_id}")
        return await self._build_and_store(party_id, session_id)

    async def invalidate_session(self, session_id: str) -> None:
        evicted = await self.session_cache.evict(session_id)
        logger.info(f"Invalidated session {session_id} (present={evicted})")

    async def invalidate_sessions_by_party_id(self, party_id: str) -> int:
        """Evict every session of one party; other parties are untouched."""
        party_id = normalize_party_id(party_id)
        evicted = await self.session_cache.evict_party(party_id)
        logger.info(f"Invalidated {evicted} sessions for party {party_id}")
        return evicted

    async def invalidate_all_sessions(self) -> int:
        """Evict every session of every party."""
        evicted = await self.session_cache.clear()
        logger.warning(f"Invalidated all sessions ({evicted} cache entries)")
        return evicted

    async def refresh_session(self, session_id: str) -> SessionContext:
        """Evict and rebuild from current downstream data.

        Request provenance (ip, user agent, metadata) is not carried over.
        """
        party_id = self._party_id_from_session_id(session_id)
        await self.session_cache.evict(session_id)
        return await self._build_and_store(party_id, session_id)

    # Validity and authorization

    def is_session_valid(self, session: Optional[SessionContext]) -> bool:
        if session is None:
            return False
        return session.is_valid(self.now())

    async def validate_session(self, session_id: str) -> bool:
        """Look up a session and check validity; any failure means invalid."""
        try:
            return self.is_session_valid(await self.get_by_session_id(session_id))
        except Exception as e:
            logger.info(f"Session {session_id} failed validation: {e}")
            return False

    async def has_access_to_product(self, party_id: str, product_id: str) -> bool:
        """True iff an active contract of the party is linked to the product.

        Never raises: a session that cannot be obtained denies access.
        """
        try:
            session = await self.get_by_party_id(party_id)
        except Exception as e:
            logger.warning(f"Access check denied for party {party_id}: {e}")
            return False

        return bool(session.find_contracts_for_product(product_id))

    async def has_permission(
        self,
        party_id: str,
        product_id: str,
        action_type: str,
        resource_type: Optional[str] = None,
    ) -> bool:
        """True iff an active contract for the product grants an active scope
        with a case-insensitively matching action (and resource, when given).

        Never raises: a session that cannot be obtained denies permission.
        """
        try:
            session = await self.get_by_party_id(party_id)
        except Exception as e:
            logger.warning(f"Permission check denied for party {party_id}: {e}")
            return False

        for contract in session.find_contracts_for_product(product_id):
            role = contract.role_in_contract
            if role is None:
                continue
            if any(scope.allows(action_type, resource_type) for scope in role.scopes):
                return True
        return False

    # Internals

    def _trusted_session_id(self, session_id: str, party_id: str) -> str:
        parsed = self.session_ids.parse(session_id)
        if self.session_ids.require_signed and not parsed.signed:
            raise InvalidSessionIdError("Session id is not trusted")
        if normalize_party_id(parsed.party_id) != party_id:
            raise InvalidSessionIdError("Session id does not belong to the requesting party")
        return session_id

    def _party_id_from_session_id(self, session_id: str) -> str:
        party_id = self.session_ids.resolve_party_id(session_id)
        try:
            return normalize_party_id(party_id)
        except (MissingPartyIdError, InvalidPartyIdError) as e:
            raise InvalidSessionIdError("Session id carries no valid party id") from e

    async def _get_or_build(
        self,
        party_id: str,
        session_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionContext:
        cached = await self.session_cache.get(session_id)
        if cached is not None:
            if cached.status != SessionStatus.ACTIVE:
                return cached
            if cached.is_valid(self.now()):
                refreshed = cached.touch(self.now(), self.session_ttl)
                await self.session_cache.put(refreshed, self.ttl_seconds)
                logger.debug(f"Session cache hit for {session_id}")
                return refreshed
            logger.debug(f"Cached session {session_id} expired, rebuilding")

        return await self._build_and_store(party_id, session_id, ip_address, user_agent, metadata)

    async def _build_and_store(
        self,
        party_id: str,
        session_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionContext:
        shell = await self.aggregator.aggregate(party_id)
        session = shell.stamp(
            session_id=session_id,
            now=self.now(),
            ttl=self.session_ttl,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata,
        )
        await self.session_cache.put(session, self.ttl_seconds)
        logger.info(
            f"Created session {session_id} for party {party_id} "
            f"with {len(session.active_contracts)} contracts"
        )
        return session
