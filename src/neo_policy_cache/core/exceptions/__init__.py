"""Cache domain exceptions.

One exception per file following maximum separation architecture.
"""

from .cache_error import CacheError
from .cache_capacity_exceeded import CacheCapacityExceeded
from .load_error import LoadError
from .policy_violation import PolicyViolation
from .handler_error import HandlerError
from .event_decode_error import EventDecodeError

__all__ = [
    "CacheError",
    "CacheCapacityExceeded",
    "LoadError",
    "PolicyViolation",
    "HandlerError",
    "EventDecodeError",
]
