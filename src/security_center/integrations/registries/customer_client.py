"""Customer registry client."""

from typing import Any, Dict, List, Optional

from ...core.exceptions.infrastructure import ResourceNotFoundError
from .base_client import BaseServiceClient, page_content


class CustomerRegistryClient(BaseServiceClient):
    """HTTP client for the customer registry."""

    service_name = "customer-registry"

    async def get_party(self, party_id: str) -> Dict[str, Any]:
        party = await self._get(f"/api/v1/parties/{party_id}")
        if not party:
            raise ResourceNotFoundError(
                f"{self.service_name} returned no party",
                details={"service": self.service_name, "party_id": party_id},
            )
        return party

    async def filter_parties(
        self,
        source_system: Optional[str] = None,
        page: int = 0,
        page_size: int = 100,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "pagination": {"pageNumber": page, "pageSize": page_size},
        }
        if source_system is not None:
            body["filters"] = {"sourceSystem": source_system}
        result = await self._post("/api/v1/parties/filter", body)
        return result or {"content": [], "currentPage": page, "totalPages": 0}

    async def get_natural_person(self, party_id: str) -> Dict[str, Any]:
        return await self._get(f"/api/v1/parties/{party_id}/natural-person")

    async def get_legal_entity(self, party_id: str) -> Dict[str, Any]:
        return await self._get(f"/api/v1/parties/{party_id}/legal-entity")

    async def filter_email_contacts(self, party_id: str, email: Optional[str] = None) -> List[Dict[str, Any]]:
        body: Dict[str, Any] = {"pagination": {"pageNumber": 0, "pageSize": 100}}
        if email is not None:
            body["filters"] = {"email": email}
        return page_content(await self._post(f"/api/v1/parties/{party_id}/email-contacts/filter", body))

    async def filter_phone_contacts(self, party_id: str) -> List[Dict[str, Any]]:
        body = {"pagination": {"pageNumber": 0, "pageSize": 100}}
        return page_content(await self._post(f"/api/v1/parties/{party_id}/phone-contacts/filter", body))
