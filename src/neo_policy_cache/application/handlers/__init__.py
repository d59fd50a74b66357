"""Cache invalidation handlers."""

from .invalidation_handlers import delete_key_handler, invalidate_pattern_handler
from .event_invalidator import (
    EventInvalidator,
    EventTrigger,
    TriggerStatus,
    TriggerTarget,
    create_event_invalidator,
)

__all__ = [
    "delete_key_handler",
    "invalidate_pattern_handler",
    "EventInvalidator",
    "EventTrigger",
    "TriggerStatus",
    "TriggerTarget",
    "create_event_invalidator",
]
