"""Eviction policy factory.

ONLY policy construction - maps configured policy names to the shipped
policy implementations.

Following maximum separation architecture - one file = one purpose.
"""

from enum import Enum
from typing import Callable, Dict, Union

from .base_policy import BaseEvictionPolicy
from .fifo_policy import FIFOPolicy
from .lfu_policy import LFUPolicy
from .lru_policy import LRUPolicy


class EvictionPolicyType(Enum):
    """Cache eviction policies."""
    LRU = "lru"    # Least Recently Used
    LFU = "lfu"    # Least Frequently Used
    FIFO = "fifo"  # First In, First Out


_POLICY_BUILDERS: Dict[EvictionPolicyType, Callable[[], BaseEvictionPolicy]] = {
    EvictionPolicyType.LRU: LRUPolicy,
    EvictionPolicyType.LFU: LFUPolicy,
    EvictionPolicyType.FIFO: FIFOPolicy,
}


def create_eviction_policy(policy: Union[str, EvictionPolicyType]) -> BaseEvictionPolicy:
    """Create a fresh eviction policy.

    Args:
        policy: Policy type or its name ("lru", "lfu", "fifo"), case-insensitive

    Returns:
        New policy instance with empty ordering state

    Raises:
        ValueError: Unknown policy name
    """
    if isinstance(policy, str):
        try:
            policy = EvictionPolicyType(policy.strip().lower())
        except ValueError:
            supported = ", ".join(p.value for p in EvictionPolicyType)
            raise ValueError(f"Unknown eviction policy '{policy}', expected one of: {supported}")

    return _POLICY_BUILDERS[policy]()
