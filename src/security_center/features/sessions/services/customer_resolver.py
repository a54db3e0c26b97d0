"""Resolves a party id into a normalized customer profile."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ....core.exceptions.session import CustomerResolutionError
from ....integrations.registries.protocols import CustomerRegistryProtocol
from ..entities.session_context import CustomerInfo, PartyKind

logger = logging.getLogger(__name__)

UNKNOWN_PERSON = "Unknown Person"
UNKNOWN_ENTITY = "Unknown Entity"


def build_person_name(person: Dict[str, Any]) -> str:
    """Join given, middle and both family names, skipping blanks."""
    parts = [
        person.get("givenName"),
        person.get("middleName"),
        person.get("familyName1"),
        person.get("familyName2"),
    ]
    name = " ".join(part.strip() for part in parts if part and part.strip())
    return name or UNKNOWN_PERSON


def build_organization_name(entity: Dict[str, Any]) -> str:
    """Prefer the trade name over the legal name."""
    for key in ("tradeName", "legalName"):
        value = entity.get(key)
        if value and value.strip():
            return value.strip()
    return UNKNOWN_ENTITY


def select_primary(contacts: List[Dict[str, Any]], value_key: str) -> Optional[str]:
    """Value of the first contact flagged primary; None if none is."""
    for contact in contacts:
        if contact.get("isPrimary") is True:
            return contact.get(value_key)
    return None


class CustomerResolver:
    """Fetches and normalizes one customer's profile from the customer registry.

    The base profile and the name detail are required. Email and phone are
    fetched concurrently afterwards and resolve to None on any failure.
    """

    def __init__(self, customer_registry: CustomerRegistryProtocol):
        self.customer_registry = customer_registry

    async def resolve(self, party_id: str) -> CustomerInfo:
        logger.debug(f"Resolving customer info for party {party_id}")

        party = await self.customer_registry.get_party(party_id)
        raw_kind = party.get("partyKind")

        try:
            kind = PartyKind(raw_kind)
        except ValueError as e:
            raise CustomerResolutionError(
                f"Unsupported party kind: {raw_kind}",
                details={"party_id": party_id, "party_kind": raw_kind},
            ) from e

        full_name = await self._resolve_full_name(party_id, kind)

        email, phone_number = await asyncio.gather(
            self._resolve_primary_email(party_id),
            self._resolve_primary_phone(party_id),
        )

        customer = CustomerInfo(
            party_id=party_id,
            party_kind=kind,
            full_name=full_name,
            tenant_id=party.get("tenantId"),
            preferred_language=party.get("preferredLanguage"),
            email=email,
            phone_number=phone_number,
            is_active=True,
        )
        logger.debug(f"Resolved customer {party_id} ({kind.value})")
        return customer

    async def _resolve_full_name(self, party_id: str, kind: PartyKind) -> str:
        if kind is PartyKind.INDIVIDUAL:
            person = await self.customer_registry.get_natural_person(party_id)
            return build_person_name(person or {})

        entity = await self.customer_registry.get_legal_entity(party_id)
        return build_organization_name(entity or {})

    async def _resolve_primary_email(self, party_id: str) -> Optional[str]:
        try:
            contacts = await self.customer_registry.filter_email_contacts(party_id)
        except Exception as e:
            logger.warning(f"Email contacts unavailable for party {party_id}: {e}")
            return None
        return select_primary(contacts or [], "email")

    async def _resolve_primary_phone(self, party_id: str) -> Optional[str]:
        try:
            contacts = await self.customer_registry.filter_phone_contacts(party_id)
        except Exception as e:
            logger.warning(f"Phone contacts unavailable for party {party_id}: {e}")
            return None
        return select_primary(contacts or [], "phoneNumber")
