"""Session feature: aggregation, caching and authorization checks."""

from .entities import RequestContext, SessionContext, SessionStatus
from .services import (
    ContractResolver,
    CustomerResolver,
    SessionAggregator,
    SessionCache,
    SessionIdCodec,
    SessionManager,
)

__all__ = [
    "ContractResolver",
    "CustomerResolver",
    "RequestContext",
    "SessionAggregator",
    "SessionCache",
    "SessionContext",
    "SessionIdCodec",
    "SessionManager",
    "SessionStatus",
]
