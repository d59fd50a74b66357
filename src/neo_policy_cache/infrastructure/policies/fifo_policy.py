"""FIFO eviction policy.

ONLY first-in-first-out ordering - evicts the earliest inserted key
still present. Accesses never change the order.

Following maximum separation architecture - one file = one purpose.
"""

from collections import OrderedDict
from typing import Hashable, List, Optional

from .base_policy import BaseEvictionPolicy


class FIFOPolicy(BaseEvictionPolicy):
    """First in, first out.

    Order is insertion sequence only, never key value; re-inserting a key
    (an overwrite) moves it to the newest position.
    """

    name = "fifo"

    def __init__(self):
        self._order: "OrderedDict[Hashable, None]" = OrderedDict()

    def on_insert(self, key: Hashable) -> None:
        self._order.pop(key, None)
        self._order[key] = None

    def on_access(self, key: Hashable) -> None:
        pass

    def on_remove(self, key: Hashable) -> None:
        self._order.pop(key, None)

    def select_victim(self) -> Optional[Hashable]:
        return next(iter(self._order), None)

    def reset(self) -> None:
        self._order.clear()

    def tracked_keys(self) -> List[Hashable]:
        return list(self._order)
