"""Base eviction policy.

ONLY shared policy scaffolding - common bookkeeping for the shipped
policies. Custom policies may subclass it or satisfy the protocol
directly.

Following maximum separation architecture - one file = one purpose.
"""

from abc import ABC, abstractmethod
from typing import Hashable, List, Optional


class BaseEvictionPolicy(ABC):
    """Abstract eviction policy with a name and a resettable order."""

    name: str = "custom"

    @abstractmethod
    def on_insert(self, key: Hashable) -> None:
        """Record that key was inserted."""

    @abstractmethod
    def on_access(self, key: Hashable) -> None:
        """Record a hit on key."""

    @abstractmethod
    def on_remove(self, key: Hashable) -> None:
        """Forget key."""

    @abstractmethod
    def select_victim(self) -> Optional[Hashable]:
        """Choose the next key to evict."""

    @abstractmethod
    def reset(self) -> None:
        """Drop all ordering metadata."""

    @abstractmethod
    def tracked_keys(self) -> List[Hashable]:
        """Keys in eviction order, next victim first."""

    def __len__(self) -> int:
        return len(self.tracked_keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tracked={len(self)})"
