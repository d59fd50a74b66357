"""Pytest configuration and fixtures for neo-policy-cache tests."""

import asyncio
from typing import Any, Hashable, List, Optional

import pytest

from neo_policy_cache import (
    CacheManager,
    FIFOPolicy,
    InvalidationDispatcher,
    LRUPolicy,
)


class GatedLoader:
    """Async loader that blocks until its gate is opened.

    Records every key it is called with so tests can assert how many
    times the backing store was hit.
    """

    def __init__(self, fail_with: Optional[Exception] = None):
        self.calls: List[Hashable] = []
        self.gate = asyncio.Event()
        self.fail_with = fail_with

    async def __call__(self, key: Hashable) -> Any:
        self.calls.append(key)
        await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return f"loaded:{key}"

    def open(self) -> None:
        self.gate.set()


@pytest.fixture
def gated_loader():
    """Loader that waits for ``open()`` before returning."""
    return GatedLoader()


@pytest.fixture
def instant_loader():
    """Loader that returns immediately and counts calls."""
    loader = GatedLoader()
    loader.open()
    return loader


@pytest.fixture
def settle():
    """Yield to the event loop enough times for queued tasks to park."""
    async def _settle(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)
    return _settle


@pytest.fixture
def fifo_cache():
    """Two-entry cache with FIFO eviction and no loader."""
    return CacheManager(capacity=2, policy=FIFOPolicy())


@pytest.fixture
def lru_cache():
    """Two-entry cache with LRU eviction and no loader."""
    return CacheManager(capacity=2, policy=LRUPolicy())


@pytest.fixture
def dispatcher():
    """Fresh invalidation dispatcher."""
    return InvalidationDispatcher()


class GhostPolicy:
    """Eviction policy that always nominates a key the cache never stored."""

    name = "ghost"

    def on_insert(self, key: Hashable) -> None:
        pass

    def on_access(self, key: Hashable) -> None:
        pass

    def on_remove(self, key: Hashable) -> None:
        pass

    def select_victim(self) -> Optional[Hashable]:
        return "ghost"


class SilentPolicy(GhostPolicy):
    """Eviction policy that never nominates anything."""

    name = "silent"

    def select_victim(self) -> Optional[Hashable]:
        return None


@pytest.fixture
def failing_loader():
    """Gated loader whose load raises ConnectionError."""
    return GatedLoader(fail_with=ConnectionError("db down"))


@pytest.fixture
def ghost_policy():
    """Policy naming a victim that is not in the store."""
    return GhostPolicy()


@pytest.fixture
def silent_policy():
    """Policy naming no victim at capacity."""
    return SilentPolicy()
