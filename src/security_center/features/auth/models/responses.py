"""Authentication API response models."""

from typing import Optional

from pydantic import Field

from ...sessions.models.responses import CamelModel
from ..services.auth_service import AuthenticationResult


class AuthenticationResponse(CamelModel):
    """Tokens plus the session bound to the authenticated party."""

    access_token: str
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    session_id: str = Field(..., description="Session identifier")
    party_id: str = Field(..., description="Customer party id")

    @classmethod
    def from_result(cls, result: AuthenticationResult) -> "AuthenticationResponse":
        return cls(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            id_token=result.id_token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            session_id=result.session_id,
            party_id=result.party_id,
        )


class CreateUserResponse(CamelModel):
    user_id: str
    username: str
