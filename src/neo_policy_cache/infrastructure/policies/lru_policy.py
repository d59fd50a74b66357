"""LRU eviction policy.

ONLY least-recently-used ordering - evicts the key whose last insert
or access is oldest.

Following maximum separation architecture - one file = one purpose.
"""

from collections import OrderedDict
from typing import Hashable, List, Optional

from .base_policy import BaseEvictionPolicy


class LRUPolicy(BaseEvictionPolicy):
    """Least recently used; an insert counts as an access."""

    name = "lru"

    def __init__(self):
        self._order: "OrderedDict[Hashable, None]" = OrderedDict()

    def on_insert(self, key: Hashable) -> None:
        self._order[key] = None
        self._order.move_to_end(key)

    def on_access(self, key: Hashable) -> None:
        # Accesses to untracked keys are ignored so the order never
        # references keys the store does not hold.
        if key in self._order:
            self._order.move_to_end(key)

    def on_remove(self, key: Hashable) -> None:
        self._order.pop(key, None)

    def select_victim(self) -> Optional[Hashable]:
        return next(iter(self._order), None)

    def reset(self) -> None:
        self._order.clear()

    def tracked_keys(self) -> List[Hashable]:
        return list(self._order)
