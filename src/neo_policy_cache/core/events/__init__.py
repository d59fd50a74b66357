"""Cache domain events."""

from .event import Event

__all__ = ["Event"]
