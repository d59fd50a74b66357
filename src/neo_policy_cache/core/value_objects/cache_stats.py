"""Cache statistics value object.

ONLY statistics snapshot - immutable counters describing cache
occupancy and effectiveness at one point in time.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache statistics."""

    size: int
    capacity: int
    hit_count: int
    miss_count: int
    eviction_count: int
    load_count: int = 0
    load_failure_count: int = 0
    invalidation_count: int = 0
    policy: str = ""

    @property
    def total_requests(self) -> int:
        """Total lookups served."""
        return self.hit_count + self.miss_count

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.hit_count / self.total_requests) * 100.0

    @property
    def utilization(self) -> float:
        """Occupancy as a percentage of capacity."""
        return (self.size / self.capacity) * 100.0 if self.capacity else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            **asdict(self),
            "total_requests": self.total_requests,
            "hit_rate_percent": self.hit_rate,
            "utilization_percent": self.utilization,
        }
