"""Cache entry domain entity.

ONLY cache entry entity - represents a cached item with the logical
sequence numbers eviction policies order by.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Any, Hashable


@dataclass
class CacheEntry:
    """Cache entry domain entity.

    Sequence numbers are logical clock ticks issued by the owning entry
    store, never wall-clock time, so ordering is total and deterministic:
    - inserted_at changes on every put of the key
    - last_accessed_at changes on every put and every touch
    """

    key: Hashable
    value: Any
    inserted_at: int
    last_accessed_at: int
    access_count: int = 0

    def touch(self, sequence: int) -> None:
        """Record an access at the given logical sequence number."""
        self.last_accessed_at = sequence
        self.access_count += 1

    def __eq__(self, other) -> bool:
        """Compare cache entries by key."""
        if not isinstance(other, CacheEntry):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        """Hash cache entry by key."""
        return hash(self.key)
