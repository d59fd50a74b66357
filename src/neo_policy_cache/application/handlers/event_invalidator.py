"""Event-based cache invalidator.

ONLY declarative event triggers - maps "event name + payload conditions"
to the cache keys an event invalidates, registered on an invalidation
dispatcher.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ...core.entities.subscription import Subscription
from ...core.events.event import Event
from ..services.cache_manager import CacheManager
from ..services.invalidation_dispatcher import InvalidationDispatcher
from .invalidation_handlers import (
    KeyFunc,
    PatternFunc,
    delete_key_handler,
    invalidate_pattern_handler,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class TriggerStatus(Enum):
    """Event trigger status."""
    ACTIVE = "active"
    PAUSED = "paused"
    DISABLED = "disabled"


class TriggerTarget(Enum):
    """What a trigger invalidates."""
    KEY = "key"
    PATTERN = "pattern"


def _payload_value(payload: Any, name: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(name, _MISSING)
    return getattr(payload, name, _MISSING)


@dataclass
class EventTrigger:
    """Event-driven invalidation trigger.

    Represents a trigger that invalidates a key or key pattern when a
    named event with matching payload fields is published.
    """
    trigger_id: str
    event_name: str
    target: TriggerTarget
    action: Callable[[Event], Awaitable[int]]
    status: TriggerStatus = TriggerStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_triggered: Optional[datetime] = None
    trigger_count: int = 0
    invalidated_count: int = 0
    description: Optional[str] = None
    conditions: Dict[str, Any] = field(default_factory=dict)
    subscription: Optional[Subscription] = None

    @property
    def is_active(self) -> bool:
        """Check if trigger is active."""
        return self.status == TriggerStatus.ACTIVE

    def matches_event_data(self, payload: Any) -> bool:
        """Check if event payload matches trigger conditions.

        Conditions compare payload fields (mapping keys or attributes)
        by plain equality or with ``$eq``, ``$in`` and ``$regex``.
        """
        if not self.conditions:
            return True

        for name, expected_value in self.conditions.items():
            actual_value = _payload_value(payload, name)
            if actual_value is _MISSING:
                return False

            if isinstance(expected_value, dict):
                if "$eq" in expected_value:
                    if actual_value != expected_value["$eq"]:
                        return False
                elif "$in" in expected_value:
                    if actual_value not in expected_value["$in"]:
                        return False
                elif "$regex" in expected_value:
                    if not re.match(expected_value["$regex"], str(actual_value)):
                        return False
                elif actual_value != expected_value:
                    return False
            else:
                if actual_value != expected_value:
                    return False

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert trigger to dictionary for listing."""
        return {
            "trigger_id": self.trigger_id,
            "event_name": self.event_name,
            "target": self.target.value,
            "status": self.status.value,
            "description": self.description,
            "conditions": self.conditions,
            "created_at": self.created_at.isoformat(),
            "last_triggered": self.last_triggered.isoformat() if self.last_triggered else None,
            "trigger_count": self.trigger_count,
            "invalidated_count": self.invalidated_count,
            "is_active": self.is_active,
        }


class EventInvalidator:
    """Event-based cache invalidator.

    Every trigger is subscribed to the dispatcher as its own handler, so
    triggers run in registration order and a failing trigger is isolated
    by the dispatcher like any other handler.
    """

    def __init__(self, cache: CacheManager, dispatcher: InvalidationDispatcher):
        """Initialize with cache and dispatcher.

        Args:
            cache: Cache manager whose entries triggers invalidate
            dispatcher: Dispatcher the triggers subscribe to
        """
        self._cache = cache
        self._dispatcher = dispatcher
        self._triggers: Dict[str, EventTrigger] = {}

    def register_key_trigger(
        self,
        event_name: str,
        key_fn: KeyFunc,
        conditions: Optional[Dict[str, Any]] = None,
        description: Optional[str] = None
    ) -> str:
        """Register a trigger deleting the key derived from each matching event.

        Returns:
            Trigger ID for management
        """
        action = delete_key_handler(self._cache, key_fn)
        return self._register(event_name, TriggerTarget.KEY, action, conditions, description)

    def register_pattern_trigger(
        self,
        event_name: str,
        pattern_fn: PatternFunc,
        conditions: Optional[Dict[str, Any]] = None,
        description: Optional[str] = None
    ) -> str:
        """Register a trigger invalidating every key matched by a payload-derived predicate.

        Returns:
            Trigger ID for management
        """
        action = invalidate_pattern_handler(self._cache, pattern_fn)
        return self._register(event_name, TriggerTarget.PATTERN, action, conditions, description)

    def unregister_trigger(self, trigger_id: str) -> bool:
        """Unregister a trigger and its dispatcher subscription."""
        trigger = self._triggers.pop(trigger_id, None)
        if trigger is None:
            return False

        if trigger.subscription is not None:
            self._dispatcher.unsubscribe(trigger.subscription)
        return True

    def pause_trigger(self, trigger_id: str) -> bool:
        """Pause an event trigger."""
        return self._set_status(trigger_id, TriggerStatus.PAUSED)

    def resume_trigger(self, trigger_id: str) -> bool:
        """Resume a paused event trigger."""
        return self._set_status(trigger_id, TriggerStatus.ACTIVE)

    def disable_trigger(self, trigger_id: str) -> bool:
        """Disable an event trigger."""
        return self._set_status(trigger_id, TriggerStatus.DISABLED)

    def get_trigger(self, trigger_id: str) -> Optional[EventTrigger]:
        """Get a trigger by ID."""
        return self._triggers.get(trigger_id)

    def list_triggers(
        self,
        event_name: Optional[str] = None,
        status: Optional[TriggerStatus] = None
    ) -> List[Dict[str, Any]]:
        """List registered triggers in registration order.

        Args:
            event_name: Optional event name filter
            status: Optional status filter
        """
        triggers = []

        for trigger in self._triggers.values():
            if event_name and trigger.event_name != event_name:
                continue
            if status and trigger.status != status:
                continue
            triggers.append(trigger.to_dict())

        return triggers

    def get_statistics(self) -> Dict[str, Any]:
        """Get trigger statistics."""
        active_triggers = sum(1 for t in self._triggers.values() if t.is_active)

        return {
            "total_triggers": len(self._triggers),
            "active_triggers": active_triggers,
            "inactive_triggers": len(self._triggers) - active_triggers,
            "total_trigger_executions": sum(t.trigger_count for t in self._triggers.values()),
            "total_keys_invalidated": sum(t.invalidated_count for t in self._triggers.values()),
            "unique_event_names": len({t.event_name for t in self._triggers.values()}),
        }

    def _register(
        self,
        event_name: str,
        target: TriggerTarget,
        action: Callable[[Event], Awaitable[int]],
        conditions: Optional[Dict[str, Any]],
        description: Optional[str]
    ) -> str:
        trigger = EventTrigger(
            trigger_id=str(uuid.uuid4()),
            event_name=event_name,
            target=target,
            action=action,
            conditions=conditions or {},
            description=description,
        )

        async def handle(event: Event) -> None:
            await self._execute_trigger(trigger, event)

        handle.__qualname__ = f"EventInvalidator.trigger<{trigger.trigger_id}>"
        trigger.subscription = self._dispatcher.subscribe(event_name, handle)
        self._triggers[trigger.trigger_id] = trigger

        logger.info(
            f"Registered {target.value} trigger {trigger.trigger_id} for '{event_name}'"
        )
        return trigger.trigger_id

    async def _execute_trigger(self, trigger: EventTrigger, event: Event) -> int:
        if not trigger.is_active or not trigger.matches_event_data(event.payload):
            return 0

        trigger.last_triggered = datetime.now(timezone.utc)
        trigger.trigger_count += 1

        invalidated = await trigger.action(event)
        trigger.invalidated_count += invalidated

        logger.debug(
            f"Trigger {trigger.trigger_id} invalidated {invalidated} keys for '{event.name}'"
        )
        return invalidated

    def _set_status(self, trigger_id: str, status: TriggerStatus) -> bool:
        trigger = self._triggers.get(trigger_id)
        if trigger is None:
            return False
        trigger.status = status
        return True


def create_event_invalidator(
    cache: CacheManager,
    dispatcher: InvalidationDispatcher
) -> EventInvalidator:
    """Factory function to create event invalidator."""
    return EventInvalidator(cache, dispatcher)
