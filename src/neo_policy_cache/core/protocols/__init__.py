"""Cache protocols for dependency injection."""

from .eviction_policy import EvictionPolicy
from .cache_loader import CacheLoader, LoaderFunc
from .event_handler import EventHandler, KeyPredicate

__all__ = [
    "EvictionPolicy",
    "CacheLoader",
    "LoaderFunc",
    "EventHandler",
    "KeyPredicate",
]
