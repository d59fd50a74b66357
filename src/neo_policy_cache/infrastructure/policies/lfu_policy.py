"""LFU eviction policy.

ONLY least-frequently-used ordering - evicts the key with the fewest
recorded accesses, oldest insertion first on ties.

Following maximum separation architecture - one file = one purpose.
"""

import itertools
from typing import Dict, Hashable, List, Optional, Tuple

from .base_policy import BaseEvictionPolicy


class LFUPolicy(BaseEvictionPolicy):
    """Least frequently used.

    Each key tracks (access count, insertion sequence). An insert starts
    the count at 1; an overwrite re-inserts the key with a fresh count.
    Victim selection is a linear scan over tracked keys.
    """

    name = "lfu"

    def __init__(self):
        self._counts: Dict[Hashable, Tuple[int, int]] = {}
        self._sequence = itertools.count(1)

    def on_insert(self, key: Hashable) -> None:
        self._counts[key] = (1, next(self._sequence))

    def on_access(self, key: Hashable) -> None:
        if key in self._counts:
            count, inserted = self._counts[key]
            self._counts[key] = (count + 1, inserted)

    def on_remove(self, key: Hashable) -> None:
        self._counts.pop(key, None)

    def select_victim(self) -> Optional[Hashable]:
        if not self._counts:
            return None
        return min(self._counts, key=self._counts.__getitem__)

    def reset(self) -> None:
        self._counts.clear()

    def frequency(self, key: Hashable) -> int:
        """Recorded access count for key, 0 if untracked."""
        return self._counts.get(key, (0, 0))[0]

    def tracked_keys(self) -> List[Hashable]:
        return sorted(self._counts, key=self._counts.__getitem__)
