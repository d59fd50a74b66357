"""Pending load entity.

ONLY in-flight load tracking - one shared future per key so concurrent
misses wait on a single loader invocation.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Hashable


@dataclass(eq=False)
class PendingLoad:
    """In-flight load for a single key.

    The owning cache manager attaches at most one pending load per key.
    A pending load is detached when it completes, or earlier when the
    key is deleted, overwritten or invalidated; a detached load still
    answers its waiters but never writes its result into the store.
    """

    key: Hashable
    future: asyncio.Future = field(
        default_factory=lambda: asyncio.get_running_loop().create_future()
    )
    waiters: int = 1
    invalidated: bool = False

    def join(self) -> asyncio.Future:
        """Register another waiter and return the shared future."""
        self.waiters += 1
        return self.future

    def invalidate(self) -> None:
        """Mark the load result as stale so it is not stored."""
        self.invalidated = True

    def resolve(self, value: Any) -> None:
        """Deliver the loaded value to every waiter."""
        if not self.future.done():
            self.future.set_result(value)

    def fail(self, error: BaseException) -> None:
        """Deliver the same failure to every waiter."""
        if not self.future.done():
            self.future.set_exception(error)
