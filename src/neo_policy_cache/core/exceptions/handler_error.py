"""Invalidation handler error.

ONLY handler failures - wraps an exception raised by a subscribed
handler during publish so it can be reported without aborting dispatch.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional

from .cache_error import CacheError


class HandlerError(CacheError):
    """A subscribed handler raised while an event was being published.

    Handler errors are collected and returned to the publisher after every
    handler has run; they are never raised by ``publish`` itself.
    """

    default_error_code = "CACHE_HANDLER_FAILED"

    def __init__(
        self,
        event_name: str,
        handler_name: str,
        cause: BaseException,
        subscription_id: Optional[str] = None
    ):
        self.event_name = event_name
        self.handler_name = handler_name
        self.cause = cause
        self.subscription_id = subscription_id

        super().__init__(
            f"Handler '{handler_name}' failed for event '{event_name}': "
            f"{type(cause).__name__}: {cause}",
            details={
                "event_name": event_name,
                "handler": handler_name,
                "subscription_id": subscription_id,
                "cause_type": type(cause).__name__,
            }
        )
        self.__cause__ = cause
