"""Event decode error.

ONLY payload decoding errors - raised to the publisher when a payload
does not satisfy the decoder registered for its event name.

Following maximum separation architecture - one file = one purpose.
"""

from .cache_error import CacheError


class EventDecodeError(CacheError):
    """Event payload failed the decoding contract for its name."""

    default_error_code = "CACHE_EVENT_DECODE_FAILED"

    def __init__(self, event_name: str, cause: BaseException):
        self.event_name = event_name
        self.cause = cause

        super().__init__(
            f"Payload for event '{event_name}' could not be decoded: {cause}",
            details={
                "event_name": event_name,
                "cause_type": type(cause).__name__,
            }
        )
