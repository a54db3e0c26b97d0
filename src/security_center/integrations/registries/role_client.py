"""Reference-data client for contract roles and scopes."""

from typing import Any, Dict, List

from .base_client import BaseServiceClient, page_content


class RoleRegistryClient(BaseServiceClient):
    """HTTP client for contract roles and their permission scopes."""

    service_name = "reference-data"

    async def get_contract_role(self, role_id: str) -> Dict[str, Any]:
        return await self._get(f"/api/v1/contract-roles/{role_id}")

    async def list_active_role_scopes(self, role_id: str) -> List[Dict[str, Any]]:
        return page_content(await self._get(f"/api/v1/contract-roles/{role_id}/scopes/active"))
