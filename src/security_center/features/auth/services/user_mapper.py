"""Maps an authenticated IDP principal to a customer party id."""

import asyncio
import logging
from typing import Any, Dict, Optional

from ....core.exceptions.auth import IdentityNotFoundError
from ....integrations.registries.protocols import CustomerRegistryProtocol
from ..entities.idp import IdpUserInfo

logger = logging.getLogger(__name__)

SOURCE_SYSTEM_PREFIX = "idp:"


class UserMapper:
    """Two-step identity mapping against the customer registry.

    1. Email: scan parties page by page and return the first, in page order,
       whose email contacts contain the address. Any failure here falls
       through to step 2. If several parties share an address, which one
       wins depends on registry order.
    2. Username (explicit hint, else ``preferred_username``): the party whose
       source system is ``idp:<username>``; first one if several.

    There is no provisioning and no fallback identity: when both steps come up
    empty an ``IdentityNotFoundError`` is raised.
    """

    def __init__(
        self,
        customer_registry: CustomerRegistryProtocol,
        page_size: int = 100,
        email_case_sensitive: bool = True,
    ):
        self.customer_registry = customer_registry
        self.page_size = page_size
        self.email_case_sensitive = email_case_sensitive

    async def map_to_party_id(self, user_info: IdpUserInfo, username: Optional[str] = None) -> str:
        email = user_info.email.strip() if user_info.email and user_info.email.strip() else None
        username = username or user_info.preferred_username

        logger.debug(f"Mapping IDP user to party (email={email is not None}, username={username})")

        if email:
            try:
                party_id = await self._find_party_by_email(email)
                if party_id:
                    logger.info(f"Mapped IDP user by email to party {party_id}")
                    return party_id
            except Exception as e:
                logger.debug(f"Email lookup failed, trying username lookup: {e}")

        if username:
            party_id = await self._find_party_by_username(username)
            if party_id:
                logger.info(f"Mapped IDP user {username} to party {party_id}")
                return party_id

        if not email and not username:
            raise IdentityNotFoundError(
                "Cannot map IDP user: no email or username provided",
                details={"sub": user_info.sub},
            )

        raise IdentityNotFoundError(
            "No customer found for IDP user; the party must exist before authentication",
            details={"sub": user_info.sub, "username": username},
        )

    async def _find_party_by_email(self, email: str) -> Optional[str]:
        page = 0
        while True:
            response = await self.customer_registry.filter_parties(page=page, page_size=self.page_size)
            parties = response.get("content") or []

            party_ids = [str(p["partyId"]) for p in parties if p.get("partyId")]
            matches = await asyncio.gather(
                *(self._party_has_email(party_id, email) for party_id in party_ids)
            )
            for party_id, matched in zip(party_ids, matches):
                if matched:
                    return party_id

            current_page = response.get("currentPage", page)
            total_pages = response.get("totalPages") or 0
            if current_page is None or current_page + 1 >= total_pages:
                return None
            page = current_page + 1

    async def _party_has_email(self, party_id: str, email: str) -> bool:
        try:
            contacts = await self.customer_registry.filter_email_contacts(party_id, email=email)
        except Exception as e:
            logger.warning(f"Error checking email contacts for party {party_id}: {e}")
            return False
        return any(self._email_matches(contact, email) for contact in contacts or [])

    def _email_matches(self, contact: Dict[str, Any], email: str) -> bool:
        candidate = contact.get("email")
        if not candidate:
            return False
        if self.email_case_sensitive:
            return candidate == email
        return candidate.casefold() == email.casefold()

    async def _find_party_by_username(self, username: str) -> Optional[str]:
        response = await self.customer_registry.filter_parties(
            source_system=f"{SOURCE_SYSTEM_PREFIX}{username}",
            page=0,
            page_size=10,
        )
        parties = response.get("content") or []
        if parties and parties[0].get("partyId"):
            return str(parties[0]["partyId"])
        return None
