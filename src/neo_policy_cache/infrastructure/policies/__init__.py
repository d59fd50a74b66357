"""Eviction policy implementations."""

from .base_policy import BaseEvictionPolicy
from .fifo_policy import FIFOPolicy
from .lru_policy import LRUPolicy
from .lfu_policy import LFUPolicy
from .policy_factory import EvictionPolicyType, create_eviction_policy

__all__ = [
    "BaseEvictionPolicy",
    "FIFOPolicy",
    "LRUPolicy",
    "LFUPolicy",
    "EvictionPolicyType",
    "create_eviction_policy",
]
