"""Domain event dispatched to invalidation handlers.

ONLY event envelope - a tagged variant whose ``name`` is the
discriminant and whose payload is decoded once at the dispatcher.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class Event:
    """Named event with an opaque payload.

    Events are transient: they are built at publish time, handed to
    every handler subscribed to ``name`` and then dropped.
    """

    name: str
    payload: Any = None
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate event name."""
        if not self.name:
            raise ValueError("Event name cannot be empty")

    def get(self, field_name: str, default: Any = None) -> Any:
        """Read a payload field from a mapping or attribute-style payload."""
        if isinstance(self.payload, dict):
            return self.payload.get(field_name, default)
        return getattr(self.payload, field_name, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging."""
        return {
            "event_id": self.event_id,
            "name": self.name,
            "occurred_at": self.occurred_at.isoformat(),
        }
