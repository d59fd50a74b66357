"""Load error exception.

ONLY loader failures - raised to every caller waiting on a key
whose loader raised, timed out, or was cancelled.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Hashable, Optional

from .cache_error import CacheError


class LoadError(CacheError):
    """Loader adapter failed to produce a value for a key.

    The key stays absent from the cache; the next lookup retries the load.
    The underlying exception is available as ``cause``.
    """

    default_error_code = "CACHE_LOAD_FAILED"

    def __init__(
        self,
        key: Hashable,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
        error_code: Optional[str] = None
    ):
        self.key = key
        self.cause = cause

        if message is None:
            reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
            message = f"Failed to load value for key {key!r}: {reason}"

        super().__init__(
            message,
            error_code=error_code,
            details={
                "key": repr(key),
                "cause_type": type(cause).__name__ if cause is not None else None,
            }
        )

    @classmethod
    def cancelled(cls, key: Hashable) -> "LoadError":
        """Create error delivered to waiters when the leading load was cancelled."""
        return cls(
            key,
            message=f"Load for key {key!r} was cancelled before completing",
            error_code="CACHE_LOAD_CANCELLED",
        )
