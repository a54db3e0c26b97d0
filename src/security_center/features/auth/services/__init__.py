"""Auth services."""

from .auth_service import AuthService
from .user_mapper import UserMapper

__all__ = ["AuthService", "UserMapper"]
