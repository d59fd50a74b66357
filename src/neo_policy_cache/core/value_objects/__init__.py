"""Cache value objects."""

from .cache_lookup import CacheLookup
from .cache_stats import CacheStats
from .invalidation_pattern import InvalidationPattern, PatternType

__all__ = [
    "CacheLookup",
    "CacheStats",
    "InvalidationPattern",
    "PatternType",
]
