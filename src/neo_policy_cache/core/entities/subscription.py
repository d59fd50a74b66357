"""Subscription entity.

ONLY handler registration record - binds one handler to one event name
for the lifetime of the owning dispatcher.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable


@dataclass(frozen=True)
class Subscription:
    """Immutable registration of a handler for an event name."""

    event_name: str
    handler: Callable[..., Any]
    subscription_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def handler_name(self) -> str:
        """Readable handler name for logs and errors."""
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)
