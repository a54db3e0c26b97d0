"""Tests for mapping IDP principals to customer parties."""

import pytest

from security_center.core.exceptions.auth import IdentityNotFoundError
from security_center.core.exceptions.infrastructure import DownstreamServiceError
from security_center.features.auth.entities.idp import IdpUserInfo
from security_center.features.auth.services.user_mapper import UserMapper

ALICE = "11111111-1111-4111-8111-111111111111"
BOB = "22222222-2222-4222-8222-222222222222"
CAROL = "33333333-3333-4333-8333-333333333333"


@pytest.fixture
def registry(empty_customer_registry):
    empty_customer_registry.add_person(ALICE, emails=[{"email": "alice@x.test", "isPrimary": True}])
    empty_customer_registry.add_person(BOB, source_system="idp:bob")
    return empty_customer_registry


class TestUserMapper:

    @pytest.mark.asyncio
    async def test_maps_by_unique_email(self, registry):
        mapper = UserMapper(registry)

        party_id = await mapper.map_to_party_id(IdpUserInfo(email="alice@x.test"))

        assert party_id == ALICE

    @pytest.mark.asyncio
    async def test_falls_back_to_username(self, registry):
        mapper = UserMapper(registry)

        party_id = await mapper.map_to_party_id(IdpUserInfo(email="nobody@x.test", preferred_username="bob"))

        assert party_id == BOB

    @pytest.mark.asyncio
    async def test_explicit_username_wins_over_claim(self, registry):
        mapper = UserMapper(registry)

        party_id = await mapper.map_to_party_id(IdpUserInfo(preferred_username="someone-else"), username="bob")

        assert party_id == BOB

    @pytest.mark.asyncio
    async def test_no_email_or_username(self, registry):
        with pytest.raises(IdentityNotFoundError):
            await UserMapper(registry).map_to_party_id(IdpUserInfo(sub="abc", email="  "))

    @pytest.mark.asyncio
    async def test_unmatched_identity(self, registry):
        with pytest.raises(IdentityNotFoundError):
            await UserMapper(registry).map_to_party_id(IdpUserInfo(email="nobody@x.test", preferred_username="zoe"))

    @pytest.mark.asyncio
    async def test_shared_email_maps_to_one_of_the_owners(self, registry):
        registry.add_person(CAROL, emails=[{"email": "alice@x.test", "isPrimary": False}])

        party_id = await UserMapper(registry).map_to_party_id(IdpUserInfo(email="alice@x.test"))

        assert party_id in {ALICE, CAROL}

    @pytest.mark.asyncio
    async def test_email_match_is_case_sensitive_by_default(self, registry):
        with pytest.raises(IdentityNotFoundError):
            await UserMapper(registry).map_to_party_id(IdpUserInfo(email="Alice@X.test"))

    @pytest.mark.asyncio
    async def test_case_insensitive_email_match(self, registry):
        mapper = UserMapper(registry, email_case_sensitive=False)

        assert await mapper.map_to_party_id(IdpUserInfo(email="Alice@X.test")) == ALICE

    @pytest.mark.asyncio
    async def test_scans_every_page(self, registry):
        mapper = UserMapper(registry, page_size=1)

        assert await mapper.map_to_party_id(IdpUserInfo(email="alice@x.test")) == ALICE
        party_id = await mapper.map_to_party_id(IdpUserInfo(email="ghost@x.test", preferred_username="bob"))
        assert party_id == BOB
        assert registry.calls["filter_parties"] >= 3

    @pytest.mark.asyncio
    async def test_contact_errors_skip_party(self, registry, failing_downstream):
        registry.email_failures[ALICE] = failing_downstream

        with pytest.raises(IdentityNotFoundError):
            await UserMapper(registry).map_to_party_id(IdpUserInfo(email="alice@x.test"))

    @pytest.mark.asyncio
    async def test_email_scan_failure_falls_through_to_username(self, registry, failing_downstream):
        original = registry.filter_parties

        async def filter_parties(source_system=None, page=0, page_size=100):
            if source_system is None:
                raise failing_downstream
            return await original(source_system=source_system, page=page, page_size=page_size)

        registry.filter_parties = filter_parties

        party_id = await UserMapper(registry).map_to_party_id(IdpUserInfo(email="alice@x.test", preferred_username="bob"))

        assert party_id == BOB

    @pytest.mark.asyncio
    async def test_username_lookup_failure_propagates(self, registry, failing_downstream):
        registry.failures["filter_parties"] = failing_downstream

        with pytest.raises(DownstreamServiceError):
            await UserMapper(registry).map_to_party_id(IdpUserInfo(preferred_username="bob"))
