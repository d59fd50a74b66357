"""Invalidation handler factories.

ONLY handler construction - builds dispatcher handlers that translate
an event payload into a key delete or a predicate invalidation.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Awaitable, Callable, Hashable

from ...core.events.event import Event
from ...core.protocols.event_handler import KeyPredicate
from ..services.cache_manager import CacheManager

KeyFunc = Callable[[Any], Hashable]
PatternFunc = Callable[[Any], KeyPredicate]


def delete_key_handler(cache: CacheManager, key_fn: KeyFunc) -> Callable[[Event], Awaitable[int]]:
    """Build a handler deleting the key derived from each event payload.

    Example:
        dispatcher.subscribe(
            "subscription.cancelled",
            delete_key_handler(cache, lambda p: f"subscription:{p.subscription_id}"),
        )
    """
    async def handle(event: Event) -> int:
        removed = await cache.delete(key_fn(event.payload))
        return int(removed)

    handle.__qualname__ = f"delete_key_handler.<{getattr(key_fn, '__name__', 'key_fn')}>"
    return handle


def invalidate_pattern_handler(
    cache: CacheManager,
    pattern_fn: PatternFunc
) -> Callable[[Event], Awaitable[int]]:
    """Build a handler invalidating every key matched by a payload-derived predicate.

    Example:
        dispatcher.subscribe(
            "customer.closed",
            invalidate_pattern_handler(
                cache, lambda p: InvalidationPattern.entity_keys("customer", p["customer_id"])
            ),
        )
    """
    async def handle(event: Event) -> int:
        return await cache.invalidate(pattern_fn(event.payload))

    handle.__qualname__ = f"invalidate_pattern_handler.<{getattr(pattern_fn, '__name__', 'pattern_fn')}>"
    return handle
