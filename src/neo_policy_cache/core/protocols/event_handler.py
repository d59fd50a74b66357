"""Event handler protocol.

ONLY handler contract - callables subscribed to the invalidation
dispatcher. Handlers may be plain functions or coroutine functions.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Awaitable, Callable, Union

from ..events.event import Event

EventHandler = Callable[[Event], Union[None, Awaitable[None], Any]]
KeyPredicate = Callable[[Any], bool]
