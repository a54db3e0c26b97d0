"""Tests for the in-memory cache backend."""

import pytest

from security_center.features.cache.adapters.memory_adapter import MemoryAdapter


class FakeTime:
    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


class TestMemoryAdapter:

    @pytest.fixture
    def fake_time(self):
        return FakeTime()

    @pytest.fixture
    def adapter(self, fake_time):
        return MemoryAdapter(max_size=3, time_func=fake_time)

    @pytest.mark.asyncio
    async def test_set_get_delete(self, adapter):
        await adapter.set("a", "1")

        assert await adapter.get("a") == "1"
        assert await adapter.delete("a") is True
        assert await adapter.delete("a") is False
        assert await adapter.get("a") is None

    @pytest.mark.asyncio
    async def test_ttl_expiry(self, adapter, fake_time):
        await adapter.set("a", "1", ttl=10)
        fake_time.value += 9
        assert await adapter.get("a") == "1"

        fake_time.value += 1
        assert await adapter.get("a") is None

    @pytest.mark.asyncio
    async def test_lru_eviction(self, adapter):
        await adapter.set("a", "1")
        await adapter.set("b", "2")
        await adapter.set("c", "3")
        await adapter.get("a")

        await adapter.set("d", "4")

        assert await adapter.get("b") is None
        assert await adapter.get("a") == "1"
        assert await adapter.size() == 3

    @pytest.mark.asyncio
    async def test_clear_by_prefix(self, adapter):
        await adapter.set("ns:session:1", "x")
        await adapter.set("ns:party:1", "y")
        await adapter.set("other:1", "z")

        assert await adapter.clear("ns:") == 2
        assert await adapter.get("other:1") == "z"

    @pytest.mark.asyncio
    async def test_delete_many(self, adapter):
        await adapter.set("a", "1")
        await adapter.set("b", "2")

        assert await adapter.delete_many(["a", "b", "missing"]) == 2

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, adapter):
        await adapter.connect()
        await adapter.set("a", "1")
        assert await adapter.health_check() is True

        await adapter.disconnect()

        assert await adapter.size() == 0
