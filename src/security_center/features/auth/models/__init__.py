"""Authentication API models."""

from .requests import (
    CreateUserRequest,
    IntrospectRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    ResetPasswordRequest,
)
from .responses import AuthenticationResponse, CreateUserResponse

__all__ = [
    "AuthenticationResponse",
    "CreateUserRequest",
    "CreateUserResponse",
    "IntrospectRequest",
    "LoginRequest",
    "LogoutRequest",
    "RefreshRequest",
    "ResetPasswordRequest",
]
