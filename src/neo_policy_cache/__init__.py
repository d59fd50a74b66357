"""neo-policy-cache.

Bounded asyncio cache with pluggable eviction policies, single-flight
loading and event-driven invalidation.
"""

from .__version__ import __version__

from .core.entities import CacheEntry, PendingLoad, Subscription
from .core.events import Event
from .core.exceptions import (
    CacheCapacityExceeded,
    CacheError,
    EventDecodeError,
    HandlerError,
    LoadError,
    PolicyViolation,
)
from .core.protocols import CacheLoader, EvictionPolicy, EventHandler, KeyPredicate, LoaderFunc
from .core.value_objects import CacheLookup, CacheStats, InvalidationPattern, PatternType

from .infrastructure.stores import EntryStore
from .infrastructure.policies import (
    BaseEvictionPolicy,
    EvictionPolicyType,
    FIFOPolicy,
    LFUPolicy,
    LRUPolicy,
    create_eviction_policy,
)

from .application.services import (
    CacheManager,
    InvalidationDispatcher,
    create_cache_manager,
    create_invalidation_dispatcher,
)
from .application.handlers import (
    EventInvalidator,
    EventTrigger,
    TriggerStatus,
    TriggerTarget,
    create_event_invalidator,
    delete_key_handler,
    invalidate_pattern_handler,
)

from .config import CacheConfig, ConfigSource, LoggingConfig, create_cache_config, setup_logging
from .module import PolicyCacheModule, create_policy_cache

__all__ = [
    "__version__",

    # Core Domain
    "CacheEntry",
    "PendingLoad",
    "Subscription",
    "Event",

    # Exceptions
    "CacheError",
    "CacheCapacityExceeded",
    "LoadError",
    "PolicyViolation",
    "HandlerError",
    "EventDecodeError",

    # Protocols
    "CacheLoader",
    "LoaderFunc",
    "EvictionPolicy",
    "EventHandler",
    "KeyPredicate",

    # Value Objects
    "CacheLookup",
    "CacheStats",
    "InvalidationPattern",
    "PatternType",

    # Infrastructure
    "EntryStore",
    "BaseEvictionPolicy",
    "EvictionPolicyType",
    "FIFOPolicy",
    "LFUPolicy",
    "LRUPolicy",
    "create_eviction_policy",

    # Services
    "CacheManager",
    "InvalidationDispatcher",
    "create_cache_manager",
    "create_invalidation_dispatcher",

    # Handlers
    "EventInvalidator",
    "EventTrigger",
    "TriggerStatus",
    "TriggerTarget",
    "create_event_invalidator",
    "delete_key_handler",
    "invalidate_pattern_handler",

    # Configuration
    "CacheConfig",
    "ConfigSource",
    "LoggingConfig",
    "create_cache_config",
    "setup_logging",

    # Module
    "PolicyCacheModule",
    "create_policy_cache",
]
