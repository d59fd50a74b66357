"""Tests for single-flight loading through the cache manager."""

import asyncio

import pytest

from neo_policy_cache import CacheManager, LoadError, PolicyViolation


class TestSingleFlight:
    """Test concurrent misses share one loader invocation."""

    @pytest.mark.asyncio
    async def test_concurrent_gets_load_once(self, gated_loader, settle):
        """Test N concurrent misses call the loader exactly once."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        tasks = [asyncio.create_task(cache.get("user:1")) for _ in range(10)]
        await settle()

        assert gated_loader.calls == ["user:1"]
        assert cache.in_flight == 1

        gated_loader.open()
        results = await asyncio.gather(*tasks)

        assert results == ["loaded:user:1"] * 10
        assert cache.in_flight == 0
        assert await cache.get("user:1") == "loaded:user:1"
        assert gated_loader.calls == ["user:1"]

    @pytest.mark.asyncio
    async def test_distinct_keys_load_independently(self, gated_loader, settle):
        """Test loads for different keys do not block each other."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        tasks = [asyncio.create_task(cache.get(key)) for key in ("a", "b")]
        await settle()

        assert sorted(gated_loader.calls) == ["a", "b"]
        assert cache.in_flight == 2

        gated_loader.open()
        assert await asyncio.gather(*tasks) == ["loaded:a", "loaded:b"]

    @pytest.mark.asyncio
    async def test_loaded_value_is_reported(self, instant_loader):
        """Test lookups distinguish cached from freshly loaded values."""
        cache = CacheManager(capacity=4, loader=instant_loader)

        first = await cache.lookup("k")
        second = await cache.lookup("k")

        assert (first.found, first.loaded) == (False, True)
        assert (second.found, second.loaded) == (True, False)
        assert cache.stats().load_count == 1

    @pytest.mark.asyncio
    async def test_get_or_load_uses_call_loader(self, instant_loader):
        """Test a per-call loader works without a configured one."""
        cache = CacheManager(capacity=4)

        assert await cache.get_or_load("k", instant_loader) == "loaded:k"
        assert await cache.get("k") == "loaded:k"


class TestLoadFailures:
    """Test loader failure propagation."""

    @pytest.mark.asyncio
    async def test_all_waiters_get_the_same_error(self, failing_loader, settle):
        """Test a failed load reaches every waiter and is not cached."""
        cache = CacheManager(capacity=4, loader=failing_loader)

        tasks = [asyncio.create_task(cache.get("k")) for _ in range(5)]
        await settle()
        failing_loader.open()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert len(failing_loader.calls) == 1
        assert all(isinstance(r, LoadError) for r in results)
        assert len({id(r) for r in results}) == 1
        assert isinstance(results[0].cause, ConnectionError)
        assert results[0].__cause__ is results[0].cause
        assert "k" not in cache
        assert cache.stats().load_failure_count == 1

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self):
        """Test the next lookup after a failure retries the loader."""
        attempts = []

        async def flaky(key):
            attempts.append(key)
            if len(attempts) == 1:
                raise TimeoutError("slow backend")
            return "ok"

        cache = CacheManager(capacity=4, loader=flaky)

        with pytest.raises(LoadError):
            await cache.get("k")
        assert await cache.get("k") == "ok"
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_loader_timeout_is_a_load_error(self):
        """Test a loader that times out surfaces as LoadError."""
        async def slow(key):
            await asyncio.wait_for(asyncio.sleep(10), timeout=0.01)

        cache = CacheManager(capacity=4, loader=slow)

        with pytest.raises(LoadError) as exc_info:
            await cache.get("k")

        assert isinstance(exc_info.value.cause, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_policy_violation_on_loaded_insert(self, ghost_policy, instant_loader):
        """Test a broken policy fails the load without touching the store."""
        cache = CacheManager(capacity=1, policy=ghost_policy, loader=instant_loader)
        await cache.set("a", 1)

        with pytest.raises(PolicyViolation):
            await cache.get("b")

        assert cache.keys() == ["a"]
        assert cache.in_flight == 0


class TestInvalidationDuringLoad:
    """Test invalidation ordering against in-flight loads."""

    @pytest.mark.asyncio
    async def test_delete_during_load_discards_result(self, gated_loader, settle):
        """Test a load invalidated mid-flight answers callers but is not stored."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        task = asyncio.create_task(cache.get("k"))
        await settle()
        await cache.delete("k")
        gated_loader.open()

        assert await task == "loaded:k"
        assert "k" not in cache

        assert await cache.get("k") == "loaded:k"
        assert gated_loader.calls == ["k", "k"]

    @pytest.mark.asyncio
    async def test_invalidate_during_load_discards_result(self, gated_loader, settle):
        """Test predicate invalidation also detaches matching loads."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        task = asyncio.create_task(cache.get("user:1"))
        await settle()
        removed = await cache.invalidate(lambda key: key.startswith("user:"))
        gated_loader.open()
        await task

        assert removed == 0
        assert "user:1" not in cache

    @pytest.mark.asyncio
    async def test_set_during_load_wins(self, gated_loader, settle):
        """Test a direct write is not overwritten by a stale load."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        task = asyncio.create_task(cache.get("k"))
        await settle()
        await cache.set("k", "fresh")
        gated_loader.open()
        await task

        assert await cache.get("k") == "fresh"
        assert gated_loader.calls == ["k"]

    @pytest.mark.asyncio
    async def test_lookup_after_invalidation_starts_new_load(self, gated_loader, settle):
        """Test callers arriving after a delete never join the stale load."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        stale = asyncio.create_task(cache.get("k"))
        await settle()
        await cache.delete("k")
        fresh = asyncio.create_task(cache.get("k"))
        await settle()

        assert gated_loader.calls == ["k", "k"]

        gated_loader.open()
        await asyncio.gather(stale, fresh)
        assert "k" in cache


class TestCancellation:
    """Test cancellation of waiters and of the leading load."""

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_load(self, gated_loader, settle):
        """Test one waiter giving up leaves the shared load running."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        tasks = [asyncio.create_task(cache.get("k")) for _ in range(3)]
        await settle()
        tasks[1].cancel()
        await settle()
        gated_loader.open()

        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert results[0] == "loaded:k"
        assert isinstance(results[1], asyncio.CancelledError)
        assert results[2] == "loaded:k"
        assert await cache.get("k") == "loaded:k"
        assert len(gated_loader.calls) == 1

    @pytest.mark.asyncio
    async def test_cancelled_leader_fails_waiters(self, gated_loader, settle):
        """Test waiters get a cancellation LoadError when the load is cancelled."""
        cache = CacheManager(capacity=4, loader=gated_loader)

        tasks = [asyncio.create_task(cache.get("k")) for _ in range(3)]
        await settle()
        tasks[0].cancel()

        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert isinstance(results[0], asyncio.CancelledError)
        for result in results[1:]:
            assert isinstance(result, LoadError)
            assert result.error_code == "CACHE_LOAD_CANCELLED"
        assert cache.in_flight == 0
        assert "k" not in cache
