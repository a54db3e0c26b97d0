"""Tests for session entities and request context."""

from datetime import datetime, timedelta, timezone

from security_center.features.sessions.entities.request_context import RequestContext, detect_channel
from security_center.features.sessions.entities.session_context import (
    ContractInfo,
    ProductInfo,
    RoleScopeInfo,
    SessionContext,
    SessionStatus,
)

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
TTL = timedelta(minutes=30)


class TestSessionContext:

    def test_stamp_sets_active_window(self):
        session = SessionContext(party_id="p").stamp("session_p_x", NOW, TTL, metadata={"channel": "web"})

        assert session.status is SessionStatus.ACTIVE
        assert session.created_at == session.last_accessed_at == NOW
        assert session.expires_at == NOW + TTL
        assert session.is_valid(NOW + timedelta(minutes=29))
        assert not session.is_valid(NOW + TTL)

    def test_touch_never_precedes_creation(self):
        session = SessionContext(party_id="p").stamp("session_p_x", NOW, TTL)

        touched = session.touch(NOW - timedelta(minutes=5), TTL)

        assert touched.last_accessed_at == NOW
        assert touched.created_at == NOW

    def test_round_trip_through_dict(self):
        contract = ContractInfo(contract_id="c", product=ProductInfo(product_id="P"))
        session = SessionContext(party_id="p", active_contracts=[contract]).stamp("session_p_x", NOW, TTL)

        assert SessionContext.from_dict(session.to_dict()) == session

    def test_find_contracts_ignores_inactive(self):
        active = ContractInfo(contract_id="c1", product=ProductInfo(product_id="P"))
        inactive = ContractInfo(contract_id="c2", product=ProductInfo(product_id="P"), is_active=False)
        unlinked = ContractInfo(contract_id="c3")
        session = SessionContext(party_id="p", active_contracts=[active, inactive, unlinked])

        assert session.find_contracts_for_product("p") == [active]


class TestRoleScopeInfo:

    def test_resource_type_optional(self):
        scope = RoleScopeInfo(scope_id="s", action_type="READ", resource_type="BALANCE")
        assert scope.allows("read")
        assert scope.allows("READ", "balance")
        assert not scope.allows("READ", "CARD")

    def test_inactive_or_actionless_scope(self):
        assert not RoleScopeInfo(scope_id="s", action_type="READ", is_active=False).allows("READ")
        assert not RoleScopeInfo(scope_id="s").allows("READ")


class TestRequestContext:

    def test_forwarded_for_first_hop(self):
        context = RequestContext.from_headers(
            {"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "10.0.0.2"},
            client_host="10.0.0.3",
        )
        assert context.ip_address == "203.0.113.7"

    def test_ip_fallbacks(self):
        assert RequestContext.from_headers({"x-real-ip": "10.0.0.2"}).ip_address == "10.0.0.2"
        assert RequestContext.from_headers({}, client_host="10.0.0.3").ip_address == "10.0.0.3"
        assert RequestContext.from_headers({}).ip_address == "unknown"

    def test_headers_and_metadata(self):
        context = RequestContext.from_headers({
            "X-Party-Id": " abc ",
            "X-Session-Id": "",
            "User-Agent": "Mozilla/5.0",
            "X-Source-Application": "web-banking",
        })

        assert context.party_id == "abc"
        assert context.session_id is None
        assert context.session_metadata() == {
            "channel": "web",
            "sourceApplication": "web-banking",
            "deviceInfo": "Mozilla/5.0",
        }

    def test_detect_channel(self):
        assert detect_channel("Mozilla/5.0 (Linux; Android) Mobile Safari") == "mobile"
        assert detect_channel("Mozilla/5.0 (X11)") == "web"
        assert detect_channel("okhttp/4.9") == "api"
        assert detect_channel(None) == "api"
