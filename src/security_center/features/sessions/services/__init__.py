"""Session services."""

from .contract_resolver import ContractResolver
from .customer_resolver import CustomerResolver
from .session_aggregator import SessionAggregator
from .session_cache import SessionCache
from .session_ids import SessionIdCodec
from .session_manager import SessionManager, normalize_party_id

__all__ = [
    "ContractResolver",
    "CustomerResolver",
    "SessionAggregator",
    "SessionCache",
    "SessionIdCodec",
    "SessionManager",
    "normalize_party_id",
]
