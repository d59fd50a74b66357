"""Policy cache module wiring.

Builds the dispatcher, cache manager and event invalidator from one
configuration so services receive explicitly owned instances rather
than process-wide singletons.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .__version__ import __version__
from .application.handlers.event_invalidator import EventInvalidator
from .application.services.cache_manager import CacheManager
from .application.services.invalidation_dispatcher import InvalidationDispatcher
from .config.cache_config import CacheConfig, create_cache_config
from .core.protocols.cache_loader import LoaderFunc
from .infrastructure.policies.policy_factory import create_eviction_policy

logger = logging.getLogger(__name__)


@dataclass
class PolicyCacheModule:
    """Wired policy cache components.

    Provides:
    - config: configuration the components were built from
    - dispatcher: event bus domain code publishes to
    - cache: the cache manager
    - invalidator: trigger registry subscribed to the dispatcher
    """

    config: CacheConfig
    dispatcher: InvalidationDispatcher
    cache: CacheManager
    invalidator: EventInvalidator

    def get_name(self) -> str:
        """Get module name."""
        return "policy_cache"

    def get_version(self) -> str:
        """Get module version."""
        return __version__


def create_policy_cache(
    config: Optional[CacheConfig] = None,
    loader: Optional[LoaderFunc] = None,
    dispatcher: Optional[InvalidationDispatcher] = None
) -> PolicyCacheModule:
    """Create a wired policy cache.

    Args:
        config: Cache configuration, defaults to ``create_cache_config()``
        loader: Optional async loader for cache misses
        dispatcher: Existing dispatcher to share with other components

    Returns:
        Module holding the config, dispatcher, cache and invalidator
    """
    config = config or create_cache_config()
    dispatcher = dispatcher or InvalidationDispatcher()

    cache = CacheManager(
        capacity=config.capacity,
        policy=create_eviction_policy(config.eviction_policy),
        loader=loader,
        overwrite_counts_as_insert=config.overwrite_counts_as_insert,
        log_operations=config.log_cache_operations,
    )
    invalidator = EventInvalidator(cache, dispatcher)

    logger.info(
        f"Policy cache created: capacity={config.capacity}, "
        f"policy={config.eviction_policy.value}, source={config.config_source.value}"
    )
    return PolicyCacheModule(
        config=config,
        dispatcher=dispatcher,
        cache=cache,
        invalidator=invalidator,
    )
