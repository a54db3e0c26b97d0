"""Security center: session orchestration gateway.

Authenticates callers against an identity provider, maps them to a customer
party, and serves a cached aggregate of the party's identity, active
contracts, roles, permission scopes and products.
"""

from .__version__ import __version__
from .config import SecurityCenterSettings, get_settings
from .features.auth.services import AuthService, UserMapper
from .features.sessions.entities import RequestContext, SessionContext, SessionStatus
from .features.sessions.services import SessionAggregator, SessionManager

__all__ = [
    "AuthService",
    "RequestContext",
    "SecurityCenterSettings",
    "SessionAggregator",
    "SessionContext",
    "SessionManager",
    "SessionStatus",
    "UserMapper",
    "__version__",
    "get_settings",
]
