"""Capability protocols for the downstream registries.

Each method returns the decoded JSON body with the registry's camelCase keys.
Implementations raise ``ResourceNotFoundError`` for a missing resource and
``DownstreamServiceError`` for any other failure, including timeouts.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class CustomerRegistryProtocol(Protocol):
    """Customer registry: parties, person and organization detail, contacts."""

    async def get_party(self, party_id: str) -> Dict[str, Any]:
        ...

    async def filter_parties(
        self,
        source_system: Optional[str] = None,
        page: int = 0,
        page_size: int = 100,
    ) -> Dict[str, Any]:
        """Return a page ``{"content": [...], "currentPage": n, "totalPages": m}``."""
        ...

    async def get_natural_person(self, party_id: str) -> Dict[str, Any]:
        ...

    async def get_legal_entity(self, party_id: str) -> Dict[str, Any]:
        ...

    async def filter_email_contacts(self, party_id: str, email: Optional[str] = None) -> List[Dict[str, Any]]:
        ...

    async def filter_phone_contacts(self, party_id: str) -> List[Dict[str, Any]]:
        ...


@runtime_checkable
class ContractRegistryProtocol(Protocol):
    """Contract registry: contract-party memberships and contracts."""

    async def list_contract_parties(self, party_id: str, is_active: bool = True) -> List[Dict[str, Any]]:
        ...

    async def get_contract(self, contract_id: str) -> Dict[str, Any]:
        ...


@runtime_checkable
class RoleRegistryProtocol(Protocol):
    """Reference data: contract roles and their permission scopes."""

    async def get_contract_role(self, role_id: str) -> Dict[str, Any]:
        ...

    async def list_active_role_scopes(self, role_id: str) -> List[Dict[str, Any]]:
        ...


@runtime_checkable
class ProductCatalogProtocol(Protocol):
    """Product catalog."""

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        ...
