"""Session API response models.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..entities.session_context import SessionContext


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleScopeInfoResponse(CamelModel):
    scope_id: str
    role_id: Optional[str] = None
    scope_code: Optional[str] = None
    scope_name: Optional[str] = None
    description: Optional[str] = None
    action_type: Optional[str] = None
    resource_type: Optional[str] = None
    is_active: bool = True


class RoleInfoResponse(CamelModel):
    role_id: str
    role_code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    scopes: List[RoleScopeInfoResponse] = Field(default_factory=list)


class ProductInfoResponse(CamelModel):
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


class ContractInfoResponse(CamelModel):
    contract_id: str
    contract_number: Optional[str] = None
    contract_status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    role_in_contract: Optional[RoleInfoResponse] = None
    product: Optional[ProductInfoResponse] = None
    is_active: bool = True


class CustomerInfoResponse(CamelModel):
    party_id: str
    party_kind: str
    full_name: str
    tenant_id: Optional[str] = None
    preferred_language: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool = True


class SessionContextResponse(CamelModel):
    """Session as returned by the API."""

    session_id: Optional[str] = Field(None, description="Session identifier")
    party_id: str = Field(..., description="Customer party id")
    customer_info: Optional[CustomerInfoResponse] = None
    active_contracts: List[ContractInfoResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_session(cls, session: SessionContext) -> "SessionContextResponse":
        return cls.model_validate(session.to_dict())
