"""Session aggregate and the value objects it owns."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional


class SessionStatus(str, Enum):
    """Lifecycle states of a session.

    LOCKED is only ever set by an external administrative write.
    """
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    INVALIDATED = "INVALIDATED"
    LOCKED = "LOCKED"


class PartyKind(str, Enum):
    """Kinds of customer parties."""
    INDIVIDUAL = "INDIVIDUAL"
    ORGANIZATION = "ORGANIZATION"


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class RoleScopeInfo:
    """A single permission granted by a role: an action on a resource type."""

    scope_id: str
    role_id: Optional[str] = None
    scope_code: Optional[str] = None
    scope_name: Optional[str] = None
    description: Optional[str] = None
    action_type: Optional[str] = None
    resource_type: Optional[str] = None
    is_active: bool = True

    def allows(self, action_type: str, resource_type: Optional[str] = None) -> bool:
        """Case-insensitive action match; resource only checked when given."""
        if not self.is_active or self.action_type is None:
            return False
        if self.action_type.casefold() != action_type.casefold():
            return False
        if resource_type is None:
            return True
        return self.resource_type is not None and self.resource_type.casefold() == resource_type.casefold()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope_id": self.scope_id,
            "role_id": self.role_id,
            "scope_code": self.scope_code,
            "scope_name": self.scope_name,
            "description": self.description,
            "action_type": self.action_type,
            "resource_type": self.resource_type,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleScopeInfo":
        return cls(
            scope_id=data["scope_id"],
            role_id=data.get("role_id"),
            scope_code=data.get("scope_code"),
            scope_name=data.get("scope_name"),
            description=data.get("description"),
            action_type=data.get("action_type"),
            resource_type=data.get("resource_type"),
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class RoleInfo:
    """Role a customer holds in a contract, with its scopes."""

    role_id: str
    role_code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    scopes: List[RoleScopeInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role_id": self.role_id,
            "role_code": self.role_code,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
            "scopes": [scope.to_dict() for scope in self.scopes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleInfo":
        return cls(
            role_id=data["role_id"],
            role_code=data.get("role_code"),
            name=data.get("name"),
            description=data.get("description"),
            is_active=data.get("is_active", True),
            scopes=[RoleScopeInfo.from_dict(s) for s in data.get("scopes", [])],
        )


@dataclass(frozen=True)
class ProductInfo:
    """Product linked to a contract."""

    product_id: str
    product_catalog_id: Optional[str] = None
    product_subtype_id: Optional[str] = None
    product_name: Optional[str] = None
    product_code: Optional[str] = None
    product_description: Optional[str] = None
    product_type: Optional[str] = None
    product_status: str = "UNKNOWN"
    launch_date: Optional[str] = None
    end_date: Optional[str] = None
    date_created: Optional[str] = None
    date_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_catalog_id": self.product_catalog_id,
            "product_subtype_id": self.product_subtype_id,
            "product_name": self.product_name,
            "product_code": self.product_code,
            "product_description": self.product_description,
            "product_type": self.product_type,
            "product_status": self.product_status,
            "launch_date": self.launch_date,
            "end_date": self.end_date,
            "date_created": self.date_created,
            "date_updated": self.date_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductInfo":
        return cls(
            product_id=data["product_id"],
            product_catalog_id=data.get("product_catalog_id"),
            product_subtype_id=data.get("product_subtype_id"),
            product_name=data.get("product_name"),
            product_code=data.get("product_code"),
            product_description=data.get("product_description"),
            product_type=data.get("product_type"),
            product_status=data.get("product_status") or "UNKNOWN",
            launch_date=data.get("launch_date"),
            end_date=data.get("end_date"),
            date_created=data.get("date_created"),
            date_updated=data.get("date_updated"),
        )


@dataclass(frozen=True)
class ContractInfo:
    """An active contract of the customer, fully enriched."""

    contract_id: str
    contract_number: Optional[str] = None
    contract_status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    role_in_contract: Optional[RoleInfo] = None
    product: Optional[ProductInfo] = None
    is_active: bool = True

    @property
    def product_id(self) -> Optional[str]:
        return self.product.product_id if self.product else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "contract_number": self.contract_number,
            "contract_status": self.contract_status,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "role_in_contract": self.role_in_contract.to_dict() if self.role_in_contract else None,
            "product": self.product.to_dict() if self.product else None,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractInfo":
        role = data.get("role_in_contract")
        product = data.get("product")
        return cls(
            contract_id=data["contract_id"],
            contract_number=data.get("contract_number"),
            contract_status=data.get("contract_status"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            role_in_contract=RoleInfo.from_dict(role) if role else None,
            product=ProductInfo.from_dict(product) if product else None,
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class CustomerInfo:
    """Snapshot of the customer's profile. Rebuilt whole, never patched."""

    party_id: str
    party_kind: PartyKind
    full_name: str
    tenant_id: Optional[str] = None
    preferred_language: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "party_id": self.party_id,
            "party_kind": self.party_kind.value,
            "full_name": self.full_name,
            "tenant_id": self.tenant_id,
            "preferred_language": self.preferred_language,
            "email": self.email,
            "phone_number": self.phone_number,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerInfo":
        return cls(
            party_id=data["party_id"],
            party_kind=PartyKind(data["party_kind"]),
            full_name=data["full_name"],
            tenant_id=data.get("tenant_id"),
            preferred_language=data.get("preferred_language"),
            email=data.get("email"),
            phone_number=data.get("phone_number"),
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class SessionContext:
    """Aggregated, time-bounded view of one customer's identity and entitlements.

    ``session_id``, timestamps and ``status`` are empty on the shell produced by
    aggregation and stamped by the session manager before storage.
    """

    party_id: str
    customer_info: Optional[CustomerInfo] = None
    active_contracts: List[ContractInfo] = field(default_factory=list)
    session_id: Optional[str] = None
    created_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: Optional[SessionStatus] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def stamp(
        self,
        session_id: str,
        now: datetime,
        ttl: timedelta,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SessionContext":
        """Return a new ACTIVE session created at ``now``."""
        return replace(
            self,
            session_id=session_id,
            created_at=now,
            last_accessed_at=now,
            expires_at=now + ttl,
            ip_address=ip_address,
            user_agent=user_agent,
            status=SessionStatus.ACTIVE,
            metadata=dict(metadata or {}),
        )

    def touch(self, now: datetime, ttl: timedelta) -> "SessionContext":
        """Return a copy accessed at ``now`` with its expiry pushed out."""
        # createdAt <= lastAccessedAt even under a skewed clock
        accessed_at = max(now, self.created_at) if self.created_at else now
        return replace(self, last_accessed_at=accessed_at, expires_at=accessed_at + ttl)

    def is_valid(self, now: datetime) -> bool:
        return (
            self.status == SessionStatus.ACTIVE
            and self.expires_at is not None
            and self.expires_at > now
        )

    def find_contracts_for_product(self, product_id: str) -> List[ContractInfo]:
        """Active contracts linked to the product (ids compared case-insensitively)."""
        wanted = product_id.lower()
        return [
            contract for contract in self.active_contracts
            if contract.is_active and contract.product_id is not None
            and contract.product_id.lower() == wanted
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to a JSON-serializable dictionary."""
        return {
            "session_id": self.session_id,
            "party_id": self.party_id,
            "customer_info": self.customer_info.to_dict() if self.customer_info else None,
            "active_contracts": [c.to_dict() for c in self.active_contracts],
            "created_at": _format_datetime(self.created_at),
            "last_accessed_at": _format_datetime(self.last_accessed_at),
            "expires_at": _format_datetime(self.expires_at),
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "status": self.status.value if self.status else None,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionContext":
        """Create session from dictionary (for cache deserialization)."""
        customer = data.get("customer_info")
        status = data.get("status")
        return cls(
            session_id=data.get("session_id"),
            party_id=data["party_id"],
            customer_info=CustomerInfo.from_dict(customer) if customer else None,
            active_contracts=[ContractInfo.from_dict(c) for c in data.get("active_contracts", [])],
            created_at=_parse_datetime(data.get("created_at")),
            last_accessed_at=_parse_datetime(data.get("last_accessed_at")),
            expires_at=_parse_datetime(data.get("expires_at")),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            status=SessionStatus(status) if status else None,
            metadata=data.get("metadata") or {},
        )
