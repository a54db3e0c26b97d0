"""Pytest configuration and fixtures for security center tests."""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from security_center.core.exceptions.infrastructure import DownstreamServiceError, ResourceNotFoundError
from security_center.features.cache.adapters.memory_adapter import MemoryAdapter
from security_center.features.cache.services.cache_service import CacheService
from security_center.features.sessions.services.contract_resolver import ContractResolver
from security_center.features.sessions.services.customer_resolver import CustomerResolver
from security_center.features.sessions.services.session_aggregator import SessionAggregator
from security_center.features.sessions.services.session_cache import SessionCache
from security_center.features.sessions.services.session_ids import SessionIdCodec
from security_center.features.sessions.services.session_manager import SessionManager

PARTY_ID = "0b8f6d52-8c1e-4d0a-9a43-2f1d3c5e7a91"
OTHER_PARTY_ID = "5d2c1e0f-3b4a-4c6d-8e9f-0a1b2c3d4e5f"
ORG_PARTY_ID = "9e8d7c6b-5a49-4382-b1a0-f9e8d7c6b5a4"
CONTRACT_ID = "c0000000-0000-4000-8000-000000000001"
PRODUCT_ID = "a0000000-0000-4000-8000-0000000000aa"
ROLE_ID = "r0000000-0000-4000-8000-000000000001"
SIGNING_KEY = "test-signing-key"


class FakeRegistry:
    """In-memory registry double: counts calls and can be told to fail.

    ``failures`` fails every call of an operation; ``failures_by_id`` fails it
    only for one resource id.
    """

    def __init__(self):
        self.calls: Counter = Counter()
        self.failures: Dict[str, Exception] = {}
        self.failures_by_id: Dict[Tuple[str, str], Exception] = {}

    def _record(self, operation: str, resource_id: Optional[str] = None) -> None:
        self.calls[operation] += 1
        if operation in self.failures:
            raise self.failures[operation]
        if (operation, resource_id) in self.failures_by_id:
            raise self.failures_by_id[(operation, resource_id)]

    @staticmethod
    def _not_found(path: str) -> ResourceNotFoundError:
        return ResourceNotFoundError("resource not found", details={"path": path})


class FakeCustomerRegistry(FakeRegistry):
    def __init__(self):
        super().__init__()
        self.parties: Dict[str, Dict[str, Any]] = {}
        self.persons: Dict[str, Dict[str, Any]] = {}
        self.entities: Dict[str, Dict[str, Any]] = {}
        self.emails: Dict[str, List[Dict[str, Any]]] = {}
        self.phones: Dict[str, List[Dict[str, Any]]] = {}
        self.email_failures: Dict[str, Exception] = {}

    def add_person(
        self,
        party_id: str,
        source_system: Optional[str] = None,
        emails: Optional[List[Dict[str, Any]]] = None,
        phones: Optional[List[Dict[str, Any]]] = None,
        **name: Any,
    ) -> None:
        self.parties[party_id] = {
            "partyId": party_id,
            "partyKind": "INDIVIDUAL",
            "tenantId": "tenant-1",
            "preferredLanguage": "es",
            "sourceSystem": source_system,
        }
        self.persons[party_id] = name or {"givenName": "Ana", "familyName1": "Lopez"}
        self.emails[party_id] = emails or []
        self.phones[party_id] = phones or []

    def add_organization(self, party_id: str, **names: Any) -> None:
        self.parties[party_id] = {"partyId": party_id, "partyKind": "ORGANIZATION", "tenantId": "tenant-1"}
        self.entities[party_id] = names
        self.emails[party_id] = []
        self.phones[party_id] = []

    async def get_party(self, party_id: str) -> Dict[str, Any]:
        self._record("get_party", party_id)
        if party_id not in self.parties:
            raise self._not_found(f"/api/v1/parties/{party_id}")
        return dict(self.parties[party_id])

    async def filter_parties(
        self,
        source_system: Optional[str] = None,
        page: int = 0,
        page_size: int = 100,
    ) -> Dict[str, Any]:
        self._record("filter_parties")
        parties = [
            p for p in self.parties.values()
            if source_system is None or p.get("sourceSystem") == source_system
        ]
        total_pages = (len(parties) + page_size - 1) // page_size
        start = page * page_size
        return {
            "content": parties[start:start + page_size],
            "currentPage": page,
            "totalPages": total_pages,
        }

    async def get_natural_person(self, party_id: str) -> Dict[str, Any]:
        self._record("get_natural_person")
        if party_id not in self.persons:
            raise self._not_found(f"/api/v1/parties/{party_id}/natural-person")
        return dict(self.persons[party_id])

    async def get_legal_entity(self, party_id: str) -> Dict[str, Any]:
        self._record("get_legal_entity")
        if party_id not in self.entities:
            raise self._not_found(f"/api/v1/parties/{party_id}/legal-entity")
        return dict(self.entities[party_id])

    async def filter_email_contacts(self, party_id: str, email: Optional[str] = None) -> List[Dict[str, Any]]:
        self._record("filter_email_contacts")
        if party_id in self.email_failures:
            raise self.email_failures[party_id]
        return list(self.emails.get(party_id, []))

    async def filter_phone_contacts(self, party_id: str) -> List[Dict[str, Any]]:
        self._record("filter_phone_contacts")
        return list(self.phones.get(party_id, []))


class FakeContractRegistry(FakeRegistry):
    def __init__(self):
        super().__init__()
        self.memberships: Dict[str, List[Dict[str, Any]]] = {}
        self.contracts: Dict[str, Dict[str, Any]] = {}

    async def list_contract_parties(self, party_id: str, is_active: bool = True) -> List[Dict[str, Any]]:
        self._record("list_contract_parties")
        return [m for m in self.memberships.get(party_id, []) if m.get("isActive") == is_active]

    async def get_contract(self, contract_id: str) -> Dict[str, Any]:
        self._record("get_contract", contract_id)
        if contract_id not in self.contracts:
            raise self._not_found(f"/api/v1/contracts/{contract_id}")
        return dict(self.contracts[contract_id])


class FakeRoleRegistry(FakeRegistry):
    def __init__(self):
        super().__init__()
        self.roles: Dict[str, Dict[str, Any]] = {}
        self.scopes: Dict[str, List[Dict[str, Any]]] = {}

    async def get_contract_role(self, role_id: str) -> Dict[str, Any]:
        self._record("get_contract_role", role_id)
        if role_id not in self.roles:
            raise self._not_found(f"/api/v1/contract-roles/{role_id}")
        return dict(self.roles[role_id])

    async def list_active_role_scopes(self, role_id: str) -> List[Dict[str, Any]]:
        self._record("list_active_role_scopes", role_id)
        return list(self.scopes.get(role_id, []))


class FakeProductCatalog(FakeRegistry):
    def __init__(self):
        super().__init__()
        self.products: Dict[str, Dict[str, Any]] = {}

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        self._record("get_product", product_id)
        if product_id not in self.products:
            raise self._not_found(f"/api/v1/products/{product_id}")
        return dict(self.products[product_id])


class MutableClock:
    """Injectable clock that tests move forward by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def customer_registry():
    """Customer registry holding one individual with primary contacts."""
    registry = FakeCustomerRegistry()
    registry.add_person(
        PARTY_ID,
        source_system="idp:ana",
        emails=[
            {"email": "old@bank.test", "isPrimary": False},
            {"email": "ana@bank.test", "isPrimary": True},
        ],
        phones=[{"phoneNumber": "+34600000000", "isPrimary": True}],
        givenName="Ana",
        middleName="Maria",
        familyName1="Lopez",
        familyName2="Garcia",
    )
    return registry


@pytest.fixture
def contract_registry():
    """One active membership: the party is OWNER of a contract on PRODUCT_ID."""
    registry = FakeContractRegistry()
    registry.memberships[PARTY_ID] = [
        {"contractId": CONTRACT_ID, "partyId": PARTY_ID, "roleInContractId": ROLE_ID, "isActive": True},
    ]
    registry.contracts[CONTRACT_ID] = {
        "contractId": CONTRACT_ID,
        "contractNumber": "CN-0001",
        "contractStatus": {"value": "ACTIVE"},
        "startDate": "2024-01-01",
        "productId": PRODUCT_ID,
    }
    return registry


@pytest.fixture
def role_registry():
    """OWNER role granting READ on BALANCE."""
    registry = FakeRoleRegistry()
    registry.roles[ROLE_ID] = {
        "roleId": ROLE_ID,
        "roleCode": "OWNER",
        "name": "Owner",
        "isActive": True,
    }
    registry.scopes[ROLE_ID] = [
        {
            "scopeId": "s-1",
            "roleId": ROLE_ID,
            "scopeCode": "READ_BALANCE",
            "actionType": "READ",
            "resourceType": "BALANCE",
            "isActive": True,
        },
    ]
    return registry


@pytest.fixture
def product_catalog():
    catalog = FakeProductCatalog()
    catalog.products[PRODUCT_ID] = {
        "productId": PRODUCT_ID,
        "productName": "Current Account",
        "productCode": "CA",
        "productType": "ACCOUNT",
        "productStatus": "ACTIVE",
    }
    return catalog


@pytest.fixture
def aggregator(customer_registry, contract_registry, role_registry, product_catalog):
    return SessionAggregator(
        CustomerResolver(customer_registry),
        ContractResolver(contract_registry, role_registry, product_catalog),
    )


@pytest_asyncio.fixture
async def cache_service():
    """Namespaced cache service over a fresh in-memory backend."""
    service = CacheService(MemoryAdapter(max_size=1000), namespace="test:sessions")
    await service.initialize()
    yield service
    await service.shutdown()


@pytest.fixture
def session_ids():
    return SessionIdCodec(SIGNING_KEY)


@pytest.fixture
def clock():
    return MutableClock(datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def session_manager(aggregator, cache_service, session_ids, clock):
    return SessionManager(
        aggregator=aggregator,
        session_cache=SessionCache(cache_service),
        session_ids=session_ids,
        session_ttl=timedelta(minutes=30),
        clock=clock,
    )


@pytest.fixture
def mock_idp():
    """Mock identity provider adapter."""
    idp = AsyncMock()
    idp.login = AsyncMock()
    idp.refresh = AsyncMock()
    idp.logout = AsyncMock(return_value=None)
    idp.get_user_info = AsyncMock()
    idp.introspect = AsyncMock()
    idp.reset_password = AsyncMock(return_value=None)
    idp.create_user = AsyncMock()
    idp.close = AsyncMock(return_value=None)
    return idp


@pytest.fixture
def failing_downstream():
    return DownstreamServiceError("registry unavailable", error_code="UpstreamUnavailable")


@pytest.fixture
def party_id():
    return PARTY_ID


@pytest.fixture
def other_party_id():
    return OTHER_PARTY_ID


@pytest.fixture
def org_party_id():
    return ORG_PARTY_ID


@pytest.fixture
def product_id():
    return PRODUCT_ID


@pytest.fixture
def contract_id():
    return CONTRACT_ID


@pytest.fixture
def role_id():
    return ROLE_ID


@pytest.fixture
def empty_customer_registry():
    return FakeCustomerRegistry()
