"""Cache loader protocol.

ONLY loader contract - the caller-supplied function that computes a
value for a key missing from the cache.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Awaitable, Callable, Hashable
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheLoader(Protocol):
    """Loader adapter protocol.

    Loaders must be safe to call concurrently for different keys. The
    cache manager guarantees at most one in-flight call per key and never
    calls a loader while holding its lock. Loaders own their timeouts.
    """

    async def __call__(self, key: Hashable) -> Any:
        """Load the value for key from the backing store."""
        ...


LoaderFunc = Callable[[Hashable], Awaitable[Any]]
