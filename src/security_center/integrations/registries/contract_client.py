"""Contract registry client."""

from typing import Any, Dict, List

from .base_client import BaseServiceClient, page_content


class ContractRegistryClient(BaseServiceClient):
    """HTTP client for the contract registry."""

    service_name = "contract-registry"

    async def list_contract_parties(self, party_id: str, is_active: bool = True) -> List[Dict[str, Any]]:
        params = {"partyId": party_id, "isActive": str(is_active).lower()}
        return page_content(await self._get("/api/v1/contract-parties", params=params))

    async def get_contract(self, contract_id: str) -> Dict[str, Any]:
        return await self._get(f"/api/v1/contracts/{contract_id}")
