"""Cache domain entities."""

from .cache_entry import CacheEntry
from .pending_load import PendingLoad
from .subscription import Subscription

__all__ = [
    "CacheEntry",
    "PendingLoad",
    "Subscription",
]
