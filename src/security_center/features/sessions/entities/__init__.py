"""Session entities."""

from .request_context import RequestContext, detect_channel
from .session_context import (
    ContractInfo,
    CustomerInfo,
    PartyKind,
    ProductInfo,
    RoleInfo,
    RoleScopeInfo,
    SessionContext,
    SessionStatus,
)

__all__ = [
    "ContractInfo",
    "CustomerInfo",
    "PartyKind",
    "ProductInfo",
    "RequestContext",
    "RoleInfo",
    "RoleScopeInfo",
    "SessionContext",
    "SessionStatus",
    "detect_channel",
]
