"""Tests for the HTTP surface."""

from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from security_center.config.settings import SecurityCenterSettings
from security_center.core.exceptions.auth import InvalidCredentialsError
from security_center.core.exceptions.infrastructure import DownstreamServiceError
from security_center.features.auth.entities.idp import IdpTokens, IdpUserInfo
from security_center.features.auth.services.auth_service import AuthService
from security_center.features.auth.services.user_mapper import UserMapper
from security_center.features.cache.adapters.memory_adapter import MemoryAdapter
from security_center.features.cache.services.cache_service import CacheService
from security_center.features.sessions.routers import session_router
from security_center.features.sessions.services.session_cache import SessionCache
from security_center.features.sessions.services.session_manager import SessionManager
from security_center.infrastructure.fastapi.app import create_app
from security_center.infrastructure.fastapi.container import ServiceContainer


@pytest.fixture
def container(aggregator, session_ids, clock, customer_registry, mock_idp):
    settings = SecurityCenterSettings(session_signing_key="test-signing-key")
    cache_service = CacheService(MemoryAdapter(), namespace=settings.session_cache_prefix)
    session_manager = SessionManager(
        aggregator=aggregator,
        session_cache=SessionCache(cache_service),
        session_ids=session_ids,
        session_ttl=timedelta(minutes=30),
        clock=clock,
    )
    return ServiceContainer(
        settings=settings,
        cache_service=cache_service,
        session_manager=session_manager,
        auth_service=AuthService(mock_idp, UserMapper(customer_registry), session_manager),
        idp=mock_idp,
    )


@pytest.fixture
def client(container):
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


class TestSessionEndpoints:

    def test_create_session(self, client, party_id):
        response = client.post(
            "/api/v1/sessions",
            headers={"X-Party-Id": party_id, "User-Agent": "Mozilla/5.0", "X-Forwarded-For": "203.0.113.7"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["partyId"] == party_id
        assert body["sessionId"].startswith(f"session_{party_id}_")
        assert body["status"] == "ACTIVE"
        assert body["ipAddress"] == "203.0.113.7"
        assert body["customerInfo"]["fullName"] == "Ana Maria Lopez Garcia"
        assert body["activeContracts"][0]["roleInContract"]["scopes"][0]["actionType"] == "READ"

    def test_create_session_without_party(self, client):
        response = client.post("/api/v1/sessions")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MissingPartyIdError"

    def test_create_session_with_invalid_party(self, client):
        response = client.post("/api/v1/sessions", headers={"X-Party-Id": "party-42"})

        assert response.status_code == 400

    def test_access_and_permission_checks(self, client, party_id, product_id):
        access = client.get("/api/v1/sessions/access-check", params={"partyId": party_id, "productId": product_id})
        read = client.get(
            "/api/v1/sessions/permission-check",
            params={"partyId": party_id, "productId": product_id, "actionType": "READ", "resourceType": "BALANCE"},
        )
        write = client.get(
            "/api/v1/sessions/permission-check",
            params={"partyId": party_id, "productId": product_id, "actionType": "WRITE"},
        )

        assert access.json() is True
        assert read.json() is True
        assert write.json() is False

    def test_get_and_validate_session(self, client, party_id):
        created = client.get(f"/api/v1/sessions/party/{party_id}").json()

        fetched = client.get(f"/api/v1/sessions/{created['sessionId']}")
        valid = client.get(f"/api/v1/sessions/{created['sessionId']}/validate")

        assert fetched.status_code == 200
        assert fetched.json()["sessionId"] == created["sessionId"]
        assert valid.json() is True

    def test_forged_session_id(self, client, party_id):
        response = client.get(f"/api/v1/sessions/session_{party_id}_{'0' * 32}")

        assert response.status_code == 404
        assert client.get(f"/api/v1/sessions/session_{party_id}_{'0' * 32}/validate").json() is False

    def test_malformed_session_id(self, client):
        assert client.get("/api/v1/sessions/garbage").status_code == 400

    def test_refresh_and_invalidate(self, client, party_id, customer_registry):
        created = client.get(f"/api/v1/sessions/party/{party_id}").json()

        refreshed = client.post(f"/api/v1/sessions/{created['sessionId']}/refresh")
        deleted = client.delete(f"/api/v1/sessions/{created['sessionId']}")
        party_deleted = client.delete(f"/api/v1/sessions/party/{party_id}")

        assert refreshed.status_code == 200
        assert customer_registry.calls["get_party"] == 2
        assert deleted.status_code == 204
        assert party_deleted.status_code == 204

    def test_downstream_failure_hides_details(self, client, party_id, customer_registry):
        customer_registry.failures["get_party"] = DownstreamServiceError(
            "customer-registry unreachable at http://internal:8081", error_code="UpstreamUnavailable"
        )

        response = client.get(f"/api/v1/sessions/party/{party_id}")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "UpstreamUnavailable"
        assert "http://internal" not in response.text


class TestAuthEndpoints:

    def test_login(self, client, mock_idp, party_id):
        mock_idp.login.return_value = IdpTokens(access_token="access", refresh_token="refresh", expires_in=300)
        mock_idp.get_user_info.return_value = IdpUserInfo(email="ana@bank.test")

        response = client.post("/api/v1/auth/login", json={"username": "ana", "password": "secret"})

        assert response.status_code == 200
        body = response.json()
        assert body["accessToken"] == "access"
        assert body["partyId"] == party_id
        assert body["sessionId"].startswith(f"session_{party_id}_")

    def test_login_invalid_credentials(self, client, mock_idp):
        mock_idp.login.side_effect = InvalidCredentialsError("Invalid username or password")

        response = client.post("/api/v1/auth/login", json={"username": "ana", "password": "wrong"})

        assert response.status_code == 401

    def test_login_unmapped_user(self, client, mock_idp):
        mock_idp.login.return_value = IdpTokens(access_token="access")
        mock_idp.get_user_info.return_value = IdpUserInfo(email="ghost@bank.test")

        response = client.post("/api/v1/auth/login", json={"username": "ghost", "password": "secret"})

        assert response.status_code == 401

    def test_login_unexpected_error(self, client, mock_idp):
        mock_idp.login.side_effect = RuntimeError("boom")

        response = client.post("/api/v1/auth/login", json={"username": "ana", "password": "secret"})

        assert response.status_code == 500

    def test_logout(self, client, mock_idp):
        response = client.post("/api/v1/auth/logout", json={"refreshToken": "refresh", "sessionId": "session_x"})

        assert response.status_code == 204
        mock_idp.logout.assert_awaited_once_with("refresh")

    def test_introspect(self, client, mock_idp):
        mock_idp.introspect.return_value = {"active": False}

        response = client.post("/api/v1/auth/introspect", json={"token": "t"})

        assert response.json() == {"active": False}

    def test_reset_password(self, client, mock_idp):
        assert client.post("/api/v1/auth/reset-password", json={"username": "ana"}).status_code == 204
        mock_idp.reset_password.assert_awaited_once_with("ana")

    def test_create_user(self, client, mock_idp):
        mock_idp.create_user.return_value = "kc-9"

        response = client.post("/api/v1/users", json={"username": "ana", "email": "ana@bank.test", "firstName": "Ana"})

        assert response.status_code == 201
        assert response.json() == {"userId": "kc-9", "username": "ana"}
        assert mock_idp.create_user.await_args.args[0].first_name == "Ana"


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["checks"]["cache"]["healthy"] is True


class TestUnconfiguredRouter:

    def test_router_requires_configuration(self):
        app = FastAPI()
        app.include_router(session_router.router)

        response = TestClient(app).get("/api/v1/sessions/garbage")

        assert response.status_code == 500
