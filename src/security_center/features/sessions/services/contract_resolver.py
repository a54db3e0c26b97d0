"""Resolves a party's active contracts with role, scopes and product."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ....integrations.registries.protocols import (
    ContractRegistryProtocol,
    ProductCatalogProtocol,
    RoleRegistryProtocol,
)
from ..entities.session_context import ContractInfo, ProductInfo, RoleInfo, RoleScopeInfo

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _status_value(value: Any) -> Optional[str]:
    # Status may arrive as a plain string or as {"value": "..."}
    if isinstance(value, dict):
        return _as_str(value.get("value"))
    return _as_str(value)


def map_role(data: Dict[str, Any], scopes: List[RoleScopeInfo]) -> RoleInfo:
    return RoleInfo(
        role_id=str(data["roleId"]),
        role_code=data.get("roleCode"),
        name=data.get("name"),
        description=data.get("description"),
        is_active=bool(data.get("isActive", True)),
        scopes=scopes,
    )


def map_scope(data: Dict[str, Any]) -> RoleScopeInfo:
    return RoleScopeInfo(
        scope_id=str(data["scopeId"]),
        role_id=_as_str(data.get("roleId")),
        scope_code=data.get("scopeCode"),
        scope_name=data.get("scopeName"),
        description=data.get("description"),
        action_type=data.get("actionType"),
        resource_type=data.get("resourceType"),
        is_active=bool(data.get("isActive", True)),
    )


def map_product(data: Dict[str, Any]) -> ProductInfo:
    return ProductInfo(
        product_id=str(data["productId"]),
        product_catalog_id=_as_str(data.get("productCatalogId")),
        product_subtype_id=_as_str(data.get("productSubtypeId")),
        product_name=data.get("productName"),
        product_code=data.get("productCode"),
        product_description=data.get("productDescription"),
        product_type=_status_value(data.get("productType")),
        product_status=_status_value(data.get("productStatus")) or "UNKNOWN",
        launch_date=_as_str(data.get("launchDate")),
        end_date=_as_str(data.get("endDate")),
        date_created=_as_str(data.get("dateCreated")),
        date_updated=_as_str(data.get("dateUpdated")),
    )


class ContractResolver:
    """Fan-out resolver for a customer's contracts.

    Failure policy:
        * membership listing fails -> no contracts (empty list)
        * contract, role or product fetch fails -> the whole resolve fails
        * role scopes fetch fails -> the role is kept with no scopes
    """

    def __init__(
        self,
        contract_registry: ContractRegistryProtocol,
        role_registry: RoleRegistryProtocol,
        product_catalog: ProductCatalogProtocol,
    ):
        self.contract_registry = contract_registry
        self.role_registry = role_registry
        self.product_catalog = product_catalog

    async def resolve(self, party_id: str) -> List[ContractInfo]:
        logger.debug(f"Resolving contracts for party {party_id}")

        memberships = await self._fetch_memberships(party_id)
        if not memberships:
            return []

        contracts = await asyncio.gather(
            *(self._enrich(membership) for membership in memberships)
        )
        logger.info(f"Resolved {len(contracts)} active contracts for party {party_id}")
        return list(contracts)

    async def _fetch_memberships(self, party_id: str) -> List[Dict[str, Any]]:
        try:
            memberships = await self.contract_registry.list_contract_parties(party_id, is_active=True)
        except Exception as e:
            logger.warning(f"Contract memberships unavailable for party {party_id}, treating as none: {e}")
            return []
        return list(memberships or [])

    async def _enrich(self, membership: Dict[str, Any]) -> ContractInfo:
        contract_id = str(membership["contractId"])
        role_id = str(membership["roleInContractId"])

        contract = await self.contract_registry.get_contract(contract_id)
        product_id = _as_str(contract.get("productId"))

        if product_id is not None:
            role, product = await asyncio.gather(
                self._fetch_role_with_scopes(role_id),
                self._fetch_product(product_id),
            )
        else:
            role = await self._fetch_role_with_scopes(role_id)
            product = None

        return ContractInfo(
            contract_id=contract_id,
            contract_number=contract.get("contractNumber"),
            contract_status=_status_value(contract.get("contractStatus")),
            start_date=_as_str(contract.get("startDate")),
            end_date=_as_str(contract.get("endDate")),
            role_in_contract=role,
            product=product,
            is_active=bool(membership.get("isActive", True)),
        )

    async def _fetch_role_with_scopes(self, role_id: str) -> RoleInfo:
        role, scopes = await asyncio.gather(
            self.role_registry.get_contract_role(role_id),
            self._fetch_scopes(role_id),
        )
        return map_role(role, scopes)

    async def _fetch_scopes(self, role_id: str) -> List[RoleScopeInfo]:
        try:
            scopes = await self.role_registry.list_active_role_scopes(role_id)
        except Exception as e:
            logger.warning(f"Scopes unavailable for role {role_id}, continuing without: {e}")
            return []
        return [map_scope(scope) for scope in scopes or []]

    async def _fetch_product(self, product_id: str) -> ProductInfo:
        return map_product(await self.product_catalog.get_product(product_id))
