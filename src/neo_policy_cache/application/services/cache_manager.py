"""Cache manager orchestration service.

ONLY cache orchestration - the concurrency-safe cache core that runs
get/set/delete/invalidate against the entry store, consults the
eviction policy at capacity and deduplicates concurrent loads.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Any, Dict, Hashable, List, Optional, Union

from ...core.entities.pending_load import PendingLoad
from ...core.exceptions.load_error import LoadError
from ...core.exceptions.policy_violation import PolicyViolation
from ...core.protocols.cache_loader import LoaderFunc
from ...core.protocols.event_handler import KeyPredicate
from ...core.protocols.eviction_policy import EvictionPolicy
from ...core.value_objects.cache_lookup import CacheLookup
from ...core.value_objects.cache_stats import CacheStats
from ...infrastructure.policies.lru_policy import LRUPolicy
from ...infrastructure.policies.policy_factory import EvictionPolicyType, create_eviction_policy
from ...infrastructure.stores.entry_store import EntryStore

logger = logging.getLogger(__name__)


class CacheManager:
    """Bounded, policy-pluggable cache with single-flight loading.

    All store and policy mutations run under one ``asyncio.Lock``. The
    loader is always invoked outside the lock so a slow backing store
    never blocks unrelated keys.

    Single-flight: the first miss for a key attaches a ``PendingLoad`` and
    runs the loader; later misses for the same key await the same future.
    Deleting, overwriting or invalidating a key detaches its pending load,
    which then answers its existing waiters but is never stored.
    """

    def __init__(
        self,
        capacity: int = 10000,
        policy: Optional[Union[EvictionPolicy, str, EvictionPolicyType]] = None,
        loader: Optional[LoaderFunc] = None,
        *,
        overwrite_counts_as_insert: bool = False,
        log_operations: bool = False
    ):
        """Initialize cache manager.

        Args:
            capacity: Maximum number of entries, must be positive
            policy: Eviction policy instance or shipped policy name (default LRU)
            loader: Optional async function computing values on a miss
            overwrite_counts_as_insert: Evict before overwriting an existing key at capacity
            log_operations: Emit debug logs for hits, misses, loads and evictions
        """
        self._store = EntryStore(capacity)
        # Installed policies that cannot be reset, held so ids stay unique
        self._single_use_policies: Dict[int, EvictionPolicy] = {}
        self._policy = self._resolve_policy(policy if policy is not None else LRUPolicy())
        self._prepare_policy(self._policy)
        self._loader = loader
        self._overwrite_counts_as_insert = overwrite_counts_as_insert
        self._log_operations = log_operations

        self._lock = asyncio.Lock()
        self._pending: Dict[Hashable, PendingLoad] = {}

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._loads = 0
        self._load_failures = 0
        self._invalidations = 0

    # Read API

    async def get(self, key: Hashable, default: Any = None) -> Any:
        """Get cached value, loading it on a miss when a loader is configured.

        Returns:
            Cached or loaded value; ``default`` on a miss without a loader

        Raises:
            LoadError: The loader failed for this key
            PolicyViolation: Storing the loaded value hit a broken policy
        """
        lookup = await self._lookup(key, self._loader)
        return lookup.value if lookup.has_value else default

    async def lookup(self, key: Hashable) -> CacheLookup:
        """Look up key, reporting whether the value was already cached."""
        return await self._lookup(key, self._loader)

    async def get_or_load(self, key: Hashable, loader: LoaderFunc) -> Any:
        """Get cached value or load it with a per-call loader (single-flight)."""
        lookup = await self._lookup(key, loader)
        return lookup.value

    def contains(self, key: Hashable) -> bool:
        """Check presence without counting a hit or touching the policy."""
        return key in self._store

    def __contains__(self, key: Hashable) -> bool:
        return self.contains(key)

    def keys(self) -> List[Hashable]:
        """Snapshot of cached keys."""
        return self._store.keys()

    # Write API

    async def set(self, key: Hashable, value: Any) -> None:
        """Write value directly, evicting a victim first when at capacity.

        Raises:
            PolicyViolation: The eviction policy broke its contract; nothing changed
        """
        async with self._lock:
            self._insert(key, value)
            self._detach_pending(key)
            self._log_operation("Cache set", key)

    async def delete(self, key: Hashable) -> bool:
        """Delete key if present.

        Idempotent: deleting an absent key returns False and is not an error.
        """
        async with self._lock:
            self._detach_pending(key)
            removed = self._remove(key)
            if removed:
                self._invalidations += 1
                self._log_operation("Cache delete", key)
            return removed

    async def invalidate(self, predicate: KeyPredicate) -> int:
        """Remove every key for which predicate holds.

        The predicate is evaluated over all keys before anything is
        removed, so a predicate that raises leaves the cache unchanged.

        Args:
            predicate: Callable taking a key, e.g. an ``InvalidationPattern``

        Returns:
            Number of entries removed
        """
        async with self._lock:
            matched = [key for key in self._store.keys() if predicate(key)]
            in_flight = [key for key in self._pending if predicate(key)]

            for key in in_flight:
                self._detach_pending(key)
            for key in matched:
                self._remove(key)

            self._invalidations += len(matched)

        if matched or in_flight:
            logger.debug(
                f"Invalidated {len(matched)} cached and {len(in_flight)} in-flight keys"
            )
        return len(matched)

    async def clear(self) -> int:
        """Remove every entry and detach every in-flight load."""
        async with self._lock:
            for key in list(self._pending):
                self._detach_pending(key)
            for key in self._store.keys():
                self._policy.on_remove(key)
            removed = self._store.clear()
            self._invalidations += removed
            return removed

    # Policy management

    @property
    def policy(self) -> EvictionPolicy:
        return self._policy

    @property
    def policy_name(self) -> str:
        return getattr(self._policy, "name", type(self._policy).__name__)

    async def set_policy(self, policy: Union[EvictionPolicy, str, EvictionPolicyType]) -> None:
        """Swap the eviction policy atomically.

        The new policy is rebuilt from the current entries in insertion
        order; no entry is removed, only future eviction order changes.

        Policies exposing ``reset()`` are cleared before the rebuild. A
        policy without it must be a fresh instance every time it is
        installed.

        Raises:
            ValueError: A policy without ``reset()`` was already installed
        """
        new_policy = self._resolve_policy(policy)

        async with self._lock:
            previous = self.policy_name
            self._prepare_policy(new_policy)
            for entry in self._store.entries_by_insertion():
                new_policy.on_insert(entry.key)
            self._policy = new_policy

        logger.info(
            f"Eviction policy swapped from '{previous}' to '{self.policy_name}' "
            f"with {self._store.size} entries carried over"
        )

    # Monitoring

    @property
    def size(self) -> int:
        return self._store.size

    @property
    def capacity(self) -> int:
        return self._store.capacity

    @property
    def in_flight(self) -> int:
        """Number of attached pending loads."""
        return len(self._pending)

    def stats(self) -> CacheStats:
        """Get point-in-time cache statistics."""
        return CacheStats(
            size=self._store.size,
            capacity=self._store.capacity,
            hit_count=self._hits,
            miss_count=self._misses,
            eviction_count=self._evictions,
            load_count=self._loads,
            load_failure_count=self._load_failures,
            invalidation_count=self._invalidations,
            policy=self.policy_name,
        )

    # Internal: lookup and single-flight

    async def _lookup(self, key: Hashable, loader: Optional[LoaderFunc]) -> CacheLookup:
        async with self._lock:
            entry = self._store.get(key)
            if entry is not None:
                self._store.touch(key)
                self._policy.on_access(key)
                self._hits += 1
                self._log_operation("Cache hit", key)
                return CacheLookup(found=True, value=entry.value)

            self._misses += 1
            self._log_operation("Cache miss", key)
            if loader is None:
                return CacheLookup(found=False)

            pending = self._pending.get(key)
            if pending is not None:
                future = pending.join()
                leader = False
            else:
                pending = PendingLoad(key)
                self._pending[key] = pending
                leader = True

        if leader:
            value = await self._run_load(pending, loader)
        else:
            # Shielded so a cancelled waiter never cancels the shared load
            value = await asyncio.shield(future)

        return CacheLookup(found=False, value=value, loaded=True)

    async def _run_load(self, pending: PendingLoad, loader: LoaderFunc) -> Any:
        self._log_operation("Loading", pending.key)

        try:
            try:
                value = await loader(pending.key)
            except Exception as e:
                await self._fail_load(pending, e)
            else:
                await self._complete_load(pending, value)
        except asyncio.CancelledError:
            self._abandon_load(pending)
            raise

        return await pending.future

    async def _complete_load(self, pending: PendingLoad, value: Any) -> None:
        async with self._lock:
            self._loads += 1
            if pending.invalidated:
                logger.warning(
                    f"Discarding load result for key {pending.key!r}: invalidated while in flight"
                )
            else:
                self._release_pending(pending)
                try:
                    self._insert(pending.key, value)
                except Exception as error:
                    pending.fail(error)
                    return

            pending.resolve(value)

    async def _fail_load(self, pending: PendingLoad, cause: Exception) -> None:
        error = LoadError(pending.key, cause)
        error.__cause__ = cause

        async with self._lock:
            self._load_failures += 1
            self._release_pending(pending)

        logger.warning(
            f"Loader failed for key {pending.key!r}: {type(cause).__name__}: {cause}"
        )
        pending.fail(error)

    def _abandon_load(self, pending: PendingLoad) -> None:
        # Runs without awaiting so detach and fail happen atomically
        self._release_pending(pending)
        pending.fail(LoadError.cancelled(pending.key))
        if pending.future.done() and not pending.future.cancelled():
            pending.future.exception()  # mark retrieved; waiters still observe it

    def _release_pending(self, pending: PendingLoad) -> None:
        if self._pending.get(pending.key) is pending:
            del self._pending[pending.key]

    def _detach_pending(self, key: Hashable) -> None:
        pending = self._pending.pop(key, None)
        if pending is not None:
            pending.invalidate()

    # Internal: store mutations, lock must be held

    def _insert(self, key: Hashable, value: Any) -> None:
        exists = key in self._store
        if self._store.is_full() and (not exists or self._overwrite_counts_as_insert):
            self._evict_one(pending_key=key)

        if key in self._store:
            self._policy.on_remove(key)
        self._store.put(key, value)
        self._policy.on_insert(key)

    def _evict_one(self, pending_key: Hashable) -> None:
        victim = self._policy.select_victim()

        if victim is None:
            violation = PolicyViolation.no_victim(self.policy_name, pending_key=pending_key)
        elif victim not in self._store:
            violation = PolicyViolation.victim_not_present(
                self.policy_name, victim, pending_key=pending_key
            )
        else:
            self._store.remove(victim)
            self._policy.on_remove(victim)
            self._evictions += 1
            self._log_operation("Evicted", victim)
            return

        logger.error(str(violation))
        raise violation

    def _remove(self, key: Hashable) -> bool:
        if not self._store.remove(key):
            return False
        self._policy.on_remove(key)
        return True

    def _prepare_policy(self, policy: EvictionPolicy) -> None:
        reset = getattr(policy, "reset", None)
        if callable(reset):
            reset()
            return

        if id(policy) in self._single_use_policies:
            name = getattr(policy, "name", type(policy).__name__)
            raise ValueError(
                f"Eviction policy '{name}' has no reset() and was already installed; "
                f"pass a fresh instance"
            )
        self._single_use_policies[id(policy)] = policy

    @staticmethod
    def _resolve_policy(policy: Union[EvictionPolicy, str, EvictionPolicyType]) -> EvictionPolicy:
        if isinstance(policy, (str, EvictionPolicyType)):
            return create_eviction_policy(policy)
        if not isinstance(policy, EvictionPolicy):
            raise TypeError(
                f"{type(policy).__name__} does not implement the eviction policy protocol"
            )
        return policy

    def _log_operation(self, message: str, key: Hashable) -> None:
        if self._log_operations:
            logger.debug(f"{message}: key={key!r}")


# Factory function for dependency injection
def create_cache_manager(
    capacity: int = 10000,
    policy: Optional[Union[EvictionPolicy, str, EvictionPolicyType]] = None,
    loader: Optional[LoaderFunc] = None,
    overwrite_counts_as_insert: bool = False,
    log_operations: bool = False
) -> CacheManager:
    """Create cache manager with dependencies."""
    return CacheManager(
        capacity=capacity,
        policy=policy,
        loader=loader,
        overwrite_counts_as_insert=overwrite_counts_as_insert,
        log_operations=log_operations,
    )
