"""Authentication orchestration: IDP login, identity mapping and session."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JWTError

from ...sessions.services.session_manager import SessionManager
from ..entities.idp import IdpAdapterProtocol, IdpTokens, IdpUserInfo, NewIdpUser
from .user_mapper import UserMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a successful login or refresh."""

    access_token: str
    refresh_token: Optional[str]
    id_token: Optional[str]
    token_type: str
    expires_in: Optional[int]
    session_id: str
    party_id: str

    def __repr__(self) -> str:
        return f"AuthenticationResult(session_id={self.session_id!r}, party_id={self.party_id!r})"


def read_unverified_claims(token: Optional[str]) -> Dict[str, Any]:
    """Claims of a JWT without signature verification; {} if unreadable.

    Only used to fill identity hints the IDP already vouched for through the
    token exchange, never for authorization.
    """
    if not token:
        return {}
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return {}


class AuthService:
    """Sequences IDP token exchange, identity mapping and session creation."""

    def __init__(
        self,
        idp: IdpAdapterProtocol,
        user_mapper: UserMapper,
        session_manager: SessionManager,
    ):
        self.idp = idp
        self.user_mapper = user_mapper
        self.session_manager = session_manager

    async def login(self, username: str, password: str) -> AuthenticationResult:
        """Authenticate with the IDP and return tokens plus the party's session."""
        logger.info(f"Login attempt for user: {username}")
        tokens = await self.idp.login(username, password)
        return await self._complete(tokens, username)

    async def refresh(self, refresh_token: str) -> AuthenticationResult:
        """Exchange a refresh token and re-resolve the party's session."""
        tokens = await self.idp.refresh(refresh_token)
        return await self._complete(tokens, None)

    async def logout(
        self,
        refresh_token: Optional[str],
        session_id: Optional[str] = None,
    ) -> None:
        """End the IDP session and evict the cached session concurrently."""
        tasks = []
        if refresh_token:
            tasks.append(self.idp.logout(refresh_token))
        if session_id:
            tasks.append(self.session_manager.invalidate_session(session_id))

        await asyncio.gather(*tasks)
        logger.info(f"Logged out session: {session_id}")

    async def introspect(self, token: str) -> Dict[str, Any]:
        return await self.idp.introspect(token)

    async def reset_password(self, username: str) -> None:
        await self.idp.reset_password(username)
        logger.info(f"Password reset requested for user: {username}")

    async def create_user(self, user: NewIdpUser) -> str:
        user_id = await self.idp.create_user(user)
        logger.info(f"Created IDP user {user.username} ({user_id})")
        return user_id

    async def _complete(self, tokens: IdpTokens, username: Optional[str]) -> AuthenticationResult:
        user_info = await self._resolve_user_info(tokens)
        party_id = await self.user_mapper.map_to_party_id(user_info, username)

        session = await self.session_manager.get_by_party_id(party_id)

        logger.info(f"Authenticated party {party_id} with session {session.session_id}")
        return AuthenticationResult(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            id_token=tokens.id_token,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
            session_id=session.session_id,
            party_id=party_id,
        )

    async def _resolve_user_info(self, tokens: IdpTokens) -> IdpUserInfo:
        user_info = await self.idp.get_user_info(tokens.access_token)
        if user_info.has_identity_hint:
            return user_info

        # Userinfo lacked email and username: fall back to the token claims
        claims = {
            **read_unverified_claims(tokens.access_token),
            **read_unverified_claims(tokens.id_token),
            **{k: v for k, v in user_info.claims.items() if v is not None},
        }
        return IdpUserInfo.from_claims(claims)
