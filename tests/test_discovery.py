"""Tests for the dynamic field discovery cache."""

from __future__ import annotations

import asyncio
import logging

import pytest

from tessera.config import ConfigurationError
from tessera.discovery import DynamicFieldCache, cache_key_for
from tests._fakes import CUSTOM_FIELDS, FakeClock, FakeFieldClient

TTL = 60.0
EPSILON = 0.001


def _cache(client: FakeFieldClient, clock: FakeClock, *, ttl: float = TTL, max_size: int = 10) -> DynamicFieldCache:
    return DynamicFieldCache(client, ttl_seconds=ttl, max_size=max_size, clock=clock)


class TestConstruction:
    def test_requires_list_fields(self, clock: FakeClock) -> None:
        with pytest.raises(ConfigurationError, match="list_fields"):
            DynamicFieldCache(object(), clock=clock)  # type: ignore[arg-type]

    def test_requires_client(self, clock: FakeClock) -> None:
        with pytest.raises(ConfigurationError):
            DynamicFieldCache(None, clock=clock)  # type: ignore[arg-type]

    @pytest.mark.parametrize("ttl", [0, -1, True, "60"])
    def test_rejects_bad_ttl(self, field_client: FakeFieldClient, ttl: object) -> None:
        with pytest.raises(ConfigurationError, match="TTL"):
            DynamicFieldCache(field_client, ttl_seconds=ttl)  # type: ignore[arg-type]

    @pytest.mark.parametrize("size", [0, -5, 1.5, False])
    def test_rejects_bad_size(self, field_client: FakeFieldClient, size: object) -> None:
        with pytest.raises(ConfigurationError, match="max size"):
            DynamicFieldCache(field_client, max_size=size)  # type: ignore[arg-type]

    def test_cache_key(self) -> None:
        assert cache_key_for(" Issue ") == "issue-fields"


class TestDiscover:
    async def test_returns_only_custom_fields(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        fields = await _cache(field_client, clock).discover("issue")
        assert [f.id for f in fields] == [f["id"] for f in CUSTOM_FIELDS]
        assert all(f.source == "dynamic" for f in fields)

    async def test_converted_shape(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        fields = await _cache(field_client, clock).discover("issue")
        points = fields[0]
        assert points.description == "Dynamic custom field: Story Points"
        assert [ap.path for ap in points.access_paths] == ["customfield_10008"]
        assert points.access_paths[0].type == "number"
        assert points.access_paths[0].frequency == "medium"
        assert points.examples == ("customfield_10008",)
        assert points.common_usage == (("customfield_10008",),)
        assert points.confidence == "high"

    async def test_second_call_is_cache_hit(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        first = await cache.discover("issue")
        second = await cache.discover("issue")
        assert first == second
        assert field_client.calls == 1

    async def test_entity_type_normalised(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        await cache.discover("ISSUE")
        assert field_client.calls == 1
        assert "issue-fields" in cache

    @pytest.mark.parametrize("entity_type", ["", "   ", None, 42])
    async def test_invalid_entity_type(
        self, field_client: FakeFieldClient, clock: FakeClock, entity_type: object, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="tessera.discovery"):
            assert await _cache(field_client, clock).discover(entity_type) == []
        assert field_client.calls == 0
        assert "Invalid entity type" in caplog.text

    async def test_malformed_descriptors_dropped(self, clock: FakeClock, caplog: pytest.LogCaptureFixture) -> None:
        client = FakeFieldClient(
            [
                {"id": "customfield_1", "name": "Good", "custom": True, "schema": {"type": "string"}},
                {"id": "", "name": "No id", "custom": True},
                {"id": "customfield_2", "custom": True},
                {"id": "customfield_3", "name": "No schema", "custom": True},
                "garbage",
            ]
        )
        with caplog.at_level(logging.WARNING, logger="tessera.discovery"):
            fields = await _cache(client, clock).discover("issue")
        assert [f.id for f in fields] == ["customfield_1", "customfield_3"]
        assert fields[1].type == "string"
        assert caplog.text.count("Dropping malformed") == 2

    async def test_returned_list_is_a_copy(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        first = await cache.discover("issue")
        first.clear()
        assert len(await cache.discover("issue")) == len(CUSTOM_FIELDS)


class TestTTL:
    async def test_hit_just_before_expiry(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        clock.advance(TTL - EPSILON)
        await cache.discover("issue")
        assert field_client.calls == 1

    async def test_miss_just_after_expiry(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        clock.advance(TTL + EPSILON)
        await cache.discover("issue")
        assert field_client.calls == 2

    async def test_reads_do_not_extend_ttl(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        clock.advance(TTL / 2)
        await cache.discover("issue")
        clock.advance(TTL / 2 + EPSILON)
        await cache.discover("issue")
        assert field_client.calls == 2

    async def test_force_refresh_bypasses_cache(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        await cache.discover("issue", force_refresh=True)
        assert field_client.calls == 2


class TestLRU:
    async def test_evicts_least_recently_used(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock, max_size=2)
        await cache.discover("a")
        clock.advance(1)
        await cache.discover("b")
        clock.advance(1)
        await cache.discover("a")
        clock.advance(1)
        await cache.discover("c")
        assert "a-fields" in cache
        assert "b-fields" not in cache
        assert "c-fields" in cache
        assert len(cache) == 2

    async def test_refresh_of_existing_key_does_not_evict(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock, max_size=2)
        await cache.discover("a")
        await cache.discover("b")
        await cache.discover("a", force_refresh=True)
        assert len(cache) == 2
        assert "b-fields" in cache


class TestSingleFlight:
    async def test_concurrent_calls_share_one_fetch(self, clock: FakeClock) -> None:
        gate = asyncio.Event()
        client = FakeFieldClient(gate=gate)
        cache = _cache(client, clock)

        first = asyncio.ensure_future(cache.discover("issue"))
        second = asyncio.ensure_future(cache.discover("issue"))
        await asyncio.sleep(0)
        assert cache.stats()["pending"] == 1
        gate.set()
        a, b = await asyncio.gather(first, second)

        assert client.calls == 1
        assert a == b
        assert cache.stats()["pending"] == 0

    async def test_different_keys_fetch_separately(self, clock: FakeClock) -> None:
        gate = asyncio.Event()
        client = FakeFieldClient(gate=gate)
        cache = _cache(client, clock)
        tasks = [asyncio.ensure_future(cache.discover(e)) for e in ("issue", "project")]
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(*tasks)
        assert client.calls == 2

    async def test_cancelled_waiter_does_not_cancel_fetch(self, clock: FakeClock) -> None:
        gate = asyncio.Event()
        client = FakeFieldClient(gate=gate)
        cache = _cache(client, clock)
        first = asyncio.ensure_future(cache.discover("issue"))
        second = asyncio.ensure_future(cache.discover("issue"))
        await asyncio.sleep(0)
        first.cancel()
        gate.set()
        result = await second
        assert len(result) == len(CUSTOM_FIELDS)
        assert "issue-fields" in cache


class TestFailures:
    async def test_backend_error_yields_empty(self, clock: FakeClock, caplog: pytest.LogCaptureFixture) -> None:
        client = FakeFieldClient(error=RuntimeError("boom"))
        with caplog.at_level(logging.ERROR, logger="tessera.discovery"):
            assert await _cache(client, clock).discover("issue") == []
        assert "Dynamic field discovery failed" in caplog.text

    async def test_failure_not_cached(self, clock: FakeClock) -> None:
        client = FakeFieldClient(error=RuntimeError("boom"))
        cache = _cache(client, clock)
        await cache.discover("issue")
        client.error = None
        fields = await cache.discover("issue")
        assert client.calls == 2
        assert len(fields) == len(CUSTOM_FIELDS)

    async def test_non_list_payload(self, clock: FakeClock) -> None:
        client = FakeFieldClient()

        async def bad_payload() -> dict[str, str]:
            return {"not": "a list"}

        client.list_fields = bad_payload  # type: ignore[method-assign,assignment]
        cache = _cache(client, clock)
        assert await cache.discover("issue") == []
        assert len(cache) == 0

    async def test_concurrent_waiters_all_get_empty(self, clock: FakeClock) -> None:
        gate = asyncio.Event()
        client = FakeFieldClient(error=RuntimeError("boom"), gate=gate)
        cache = _cache(client, clock)
        tasks = [asyncio.ensure_future(cache.discover("issue")) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        assert await asyncio.gather(*tasks) == [[], [], []]
        assert client.calls == 1
        assert cache.stats()["pending"] == 0


class TestMaintenance:
    async def test_clear(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock)
        await cache.discover("issue")
        cache.clear()
        assert len(cache) == 0
        await cache.discover("issue")
        assert field_client.calls == 2

    async def test_stats(self, field_client: FakeFieldClient, clock: FakeClock) -> None:
        cache = _cache(field_client, clock, ttl=30, max_size=5)
        await cache.discover("issue")
        stats = cache.stats()
        assert stats == {"entries": 1, "max_size": 5, "ttl_seconds": 30.0, "pending": 0, "keys": ["issue-fields"]}
