"""Invalidation dispatcher service.

ONLY event dispatch - an explicitly owned event bus that lets domain
code publish named events and lets handlers turn them into targeted
cache invalidations.

Following maximum separation architecture - one file = one purpose.
"""

import dataclasses
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from ...core.entities.subscription import Subscription
from ...core.events.event import Event
from ...core.exceptions.event_decode_error import EventDecodeError
from ...core.exceptions.handler_error import HandlerError
from ...core.protocols.event_handler import EventHandler

logger = logging.getLogger(__name__)

PayloadDecoder = Union[Type[BaseModel], Callable[[Any], Any]]


class InvalidationDispatcher:
    """Synchronous in-process event bus for cache invalidation.

    Handlers run in the publishing task, one after another in
    registration order, so every cache mutation a handler performs has
    completed when ``publish`` returns. A failing handler is logged and
    reported but never stops the handlers after it.

    Each event name may have one decoder, applied once here before any
    handler sees the payload.
    """

    def __init__(self):
        self._subscriptions: Dict[str, Tuple[Subscription, ...]] = {}
        self._decoders: Dict[str, PayloadDecoder] = {}

    # Event types

    def register_event_type(self, event_name: str, decoder: PayloadDecoder) -> None:
        """Fix the decoding contract for an event name.

        Args:
            event_name: Event discriminant, e.g. "subscription.cancelled"
            decoder: Pydantic model class or callable turning the raw payload
                into the value handlers receive

        Raises:
            ValueError: A decoder is already registered for event_name
        """
        if not event_name:
            raise ValueError("Event name cannot be empty")
        if event_name in self._decoders:
            raise ValueError(f"Event type '{event_name}' already has a decoder")

        self._decoders[event_name] = decoder

    def decode(self, event_name: str, payload: Any) -> Any:
        """Apply the registered decoder for event_name to payload.

        Raises:
            EventDecodeError: The payload does not satisfy the decoder
        """
        decoder = self._decoders.get(event_name)
        if decoder is None:
            return payload

        if isinstance(decoder, type) and issubclass(decoder, BaseModel):
            if isinstance(payload, decoder):
                return payload
            try:
                return decoder.model_validate(payload)
            except ValidationError as e:
                raise EventDecodeError(event_name, e) from e

        try:
            return decoder(payload)
        except Exception as e:
            raise EventDecodeError(event_name, e) from e

    # Subscriptions

    def subscribe(self, event_name: str, handler: EventHandler) -> Subscription:
        """Register handler for event_name.

        Multiple handlers per name are allowed and run in registration
        order. Handlers subscribed while a publish is running take effect
        from the next publish.
        """
        if not event_name:
            raise ValueError("Event name cannot be empty")
        if not callable(handler):
            raise TypeError("Handler must be callable")

        subscription = Subscription(event_name=event_name, handler=handler)
        self._subscriptions[event_name] = self._subscriptions.get(event_name, ()) + (subscription,)

        logger.debug(f"Subscribed {subscription.handler_name} to '{event_name}'")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription, returns False if it was not registered."""
        current = self._subscriptions.get(subscription.event_name, ())
        remaining = tuple(s for s in current if s.subscription_id != subscription.subscription_id)

        if len(remaining) == len(current):
            return False

        if remaining:
            self._subscriptions[subscription.event_name] = remaining
        else:
            del self._subscriptions[subscription.event_name]
        return True

    def subscriptions(self, event_name: Optional[str] = None) -> List[Subscription]:
        """List subscriptions, optionally for one event name."""
        if event_name is not None:
            return list(self._subscriptions.get(event_name, ()))
        return [s for subs in self._subscriptions.values() for s in subs]

    def clear(self) -> None:
        """Drop every subscription and decoder."""
        self._subscriptions.clear()
        self._decoders.clear()

    # Publishing

    async def publish(self, event_name: str, payload: Any = None) -> List[HandlerError]:
        """Publish a named event to every subscribed handler.

        Returns:
            Errors raised by handlers, empty when all succeeded or none exist

        Raises:
            EventDecodeError: Payload rejected by the event type's decoder
        """
        event = Event(name=event_name, payload=self.decode(event_name, payload))
        return await self._dispatch(event)

    async def publish_event(self, event: Event) -> List[HandlerError]:
        """Publish an already built event."""
        decoded = self.decode(event.name, event.payload)
        if decoded is not event.payload:
            event = dataclasses.replace(event, payload=decoded)
        return await self._dispatch(event)

    async def _dispatch(self, event: Event) -> List[HandlerError]:
        subscriptions = self._subscriptions.get(event.name, ())
        if not subscriptions:
            logger.debug(f"No handlers subscribed to '{event.name}'")
            return []

        errors: List[HandlerError] = []
        for subscription in subscriptions:
            try:
                result = subscription.handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.exception(
                    f"Handler {subscription.handler_name} failed for event "
                    f"'{event.name}' ({event.event_id})"
                )
                errors.append(
                    HandlerError(
                        event_name=event.name,
                        handler_name=subscription.handler_name,
                        cause=e,
                        subscription_id=subscription.subscription_id,
                    )
                )

        return errors


def create_invalidation_dispatcher() -> InvalidationDispatcher:
    """Create an invalidation dispatcher."""
    return InvalidationDispatcher()
