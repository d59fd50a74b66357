"""Base cache exception.

ONLY the shared exception shape - every cache error carries a
machine-readable code and structured details.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional


class CacheError(Exception):
    """Base class for all policy cache errors."""

    default_error_code = "CACHE_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
