"""Identity provider entities and the adapter protocol."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class IdpTokens:
    """Tokens issued by the identity provider."""

    access_token: str
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    refresh_expires_in: Optional[int] = None
    scope: Optional[str] = None

    @classmethod
    def from_token_response(cls, response: Dict[str, Any]) -> "IdpTokens":
        """Create tokens from an OAuth2 token endpoint response."""
        return cls(
            access_token=response["access_token"],
            refresh_token=response.get("refresh_token"),
            id_token=response.get("id_token"),
            token_type=response.get("token_type") or "Bearer",
            expires_in=response.get("expires_in"),
            refresh_expires_in=response.get("refresh_expires_in"),
            scope=response.get("scope"),
        )

    def __repr__(self) -> str:
        # Token values must never reach logs
        return f"IdpTokens(token_type={self.token_type!r}, expires_in={self.expires_in!r})"


@dataclass(frozen=True)
class IdpUserInfo:
    """Claims describing the authenticated principal."""

    sub: Optional[str] = None
    email: Optional[str] = None
    preferred_username: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "IdpUserInfo":
        return cls(
            sub=claims.get("sub"),
            email=claims.get("email"),
            preferred_username=claims.get("preferred_username"),
            given_name=claims.get("given_name"),
            family_name=claims.get("family_name"),
            claims=dict(claims),
        )

    @property
    def has_identity_hint(self) -> bool:
        return bool((self.email and self.email.strip()) or self.preferred_username)


@dataclass(frozen=True)
class NewIdpUser:
    """User to be created in the identity provider."""

    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    enabled: bool = True
    email_verified: bool = False
    required_actions: List[str] = field(default_factory=list)
    attributes: Dict[str, List[str]] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"NewIdpUser(username={self.username!r})"


@runtime_checkable
class IdpAdapterProtocol(Protocol):
    """Uniform asynchronous capability of an identity provider."""

    async def login(self, username: str, password: str) -> IdpTokens:
        ...

    async def refresh(self, refresh_token: str) -> IdpTokens:
        ...

    async def logout(self, refresh_token: str) -> None:
        ...

    async def get_user_info(self, access_token: str) -> IdpUserInfo:
        ...

    async def introspect(self, token: str) -> Dict[str, Any]:
        ...

    async def reset_password(self, username: str) -> None:
        ...

    async def create_user(self, user: NewIdpUser) -> str:
        """Create a user and return the IDP's user id."""
        ...

    async def close(self) -> None:
        ...
