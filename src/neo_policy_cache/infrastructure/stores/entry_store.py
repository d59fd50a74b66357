"""Entry store.

ONLY bounded key/value storage - holds cache entries and their logical
sequence numbers. Ordering decisions belong to the eviction policy and
synchronization belongs to the cache manager.

Following maximum separation architecture - one file = one purpose.
"""

import itertools
from typing import Any, Dict, Hashable, Iterator, List, Optional

from ...core.entities.cache_entry import CacheEntry
from ...core.exceptions.cache_capacity_exceeded import CacheCapacityExceeded


class EntryStore:
    """Bounded in-memory entry storage.

    Not safe for concurrent use on its own; the cache manager serializes
    every call under its lock.
    """

    def __init__(self, capacity: int):
        """Initialize entry store.

        Args:
            capacity: Maximum number of entries, must be positive
        """
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValueError("capacity must be a positive integer")

        self._capacity = capacity
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._sequence = itertools.count(1)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._entries)

    def is_full(self) -> bool:
        """Check whether a new key would need an eviction first."""
        return len(self._entries) >= self._capacity

    def get(self, key: Hashable) -> Optional[CacheEntry]:
        """Get entry by key without touching access metadata."""
        return self._entries.get(key)

    def put(self, key: Hashable, value: Any) -> CacheEntry:
        """Insert or overwrite an entry.

        Every put is a fresh logical insert: an overwritten key receives a
        new insertion sequence number, so the most recent put wins.

        Raises:
            CacheCapacityExceeded: key is new and the store is full
        """
        if key not in self._entries and self.is_full():
            raise CacheCapacityExceeded(len(self._entries), self._capacity, key=key)

        sequence = next(self._sequence)
        previous = self._entries.pop(key, None)
        entry = CacheEntry(
            key=key,
            value=value,
            inserted_at=sequence,
            last_accessed_at=sequence,
            access_count=previous.access_count if previous else 0,
        )
        self._entries[key] = entry
        return entry

    def touch(self, key: Hashable) -> bool:
        """Record an access on key, returns False if absent."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        entry.touch(next(self._sequence))
        return True

    def remove(self, key: Hashable) -> bool:
        """Remove key, returns whether anything was removed."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Remove every entry, returns the number removed."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def keys(self) -> List[Hashable]:
        """Snapshot of the stored keys."""
        return list(self._entries.keys())

    def entries_by_insertion(self) -> List[CacheEntry]:
        """Entries in ascending insertion sequence."""
        return sorted(self._entries.values(), key=lambda entry: entry.inserted_at)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._entries))
