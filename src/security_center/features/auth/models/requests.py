"""Authentication API request models."""

from typing import Dict, List, Optional

from pydantic import Field, field_validator

from ...sessions.models.responses import CamelModel


class LoginRequest(CamelModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=255, description="Password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()


class RefreshRequest(CamelModel):
    """Token refresh request."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class LogoutRequest(CamelModel):
    """Logout request; the session id is evicted alongside the IDP logout."""

    refresh_token: Optional[str] = Field(None, description="Refresh token to revoke")
    session_id: Optional[str] = Field(None, description="Session to invalidate")


class IntrospectRequest(CamelModel):
    token: str = Field(..., min_length=1, description="Token to introspect")


class ResetPasswordRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=255, description="Username")


class CreateUserRequest(CamelModel):
    """New identity provider user."""

    username: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=320)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    password: Optional[str] = Field(None, min_length=1, max_length=128)
    enabled: bool = True
    email_verified: bool = False
    required_actions: List[str] = Field(default_factory=list)
    attributes: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v
