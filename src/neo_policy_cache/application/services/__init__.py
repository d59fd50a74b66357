"""Cache application services."""

from .cache_manager import CacheManager, create_cache_manager
from .invalidation_dispatcher import InvalidationDispatcher, create_invalidation_dispatcher

__all__ = [
    "CacheManager",
    "create_cache_manager",
    "InvalidationDispatcher",
    "create_invalidation_dispatcher",
]
