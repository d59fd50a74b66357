"""Cache capacity exceeded exception.

ONLY capacity errors - exception raised when an insert would grow the
entry store past its configured capacity.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Optional

from .cache_error import CacheError


class CacheCapacityExceeded(CacheError):
    """Cache capacity exceeded error.

    Raised by the entry store when a new key is put into a full store.
    The cache manager always evicts before inserting, so seeing this
    from the manager means the store was used directly.
    """

    default_error_code = "CACHE_CAPACITY_EXCEEDED"

    def __init__(
        self,
        current_value: int,
        limit_value: int,
        operation: str = "put",
        key: Optional[Any] = None
    ):
        """Initialize cache capacity exceeded error.

        Args:
            current_value: Current number of entries
            limit_value: Maximum allowed entries
            operation: Operation that would exceed capacity
            key: Key that was being inserted
        """
        self.current_value = current_value
        self.limit_value = limit_value
        self.operation = operation
        self.key = key

        super().__init__(
            f"Cache capacity exceeded during {operation}: "
            f"{current_value} >= {limit_value}",
            details={"key": repr(key) if key is not None else None}
        )

    def get_utilization_percentage(self) -> float:
        """Get capacity utilization as percentage."""
        if self.limit_value == 0:
            return 100.0
        return (self.current_value / self.limit_value) * 100.0

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            **super().to_dict(),
            "current_value": self.current_value,
            "limit_value": self.limit_value,
            "operation": self.operation,
            "utilization_percentage": self.get_utilization_percentage(),
        }
