"""Eviction policy protocol.

ONLY eviction contract - defines the capability set every eviction
policy exposes to the cache manager.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Hashable, Optional
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class EvictionPolicy(Protocol):
    """Eviction policy protocol.

    A policy only tracks ordering metadata; it never owns cached values.
    The cache manager calls every method under its lock, so policies need
    no synchronization of their own.

    Contract checked by the cache manager:
    - ``select_victim`` returns a key currently present in the store
    - ``select_victim`` returns None only when the store is empty
    """

    def on_insert(self, key: Hashable) -> None:
        """Record that key was inserted (or re-inserted by an overwrite)."""
        ...

    def on_access(self, key: Hashable) -> None:
        """Record a cache hit on key."""
        ...

    def on_remove(self, key: Hashable) -> None:
        """Forget key after it was deleted, invalidated or evicted."""
        ...

    def select_victim(self) -> Optional[Hashable]:
        """Choose the key to evict, or None when nothing is tracked."""
        ...
