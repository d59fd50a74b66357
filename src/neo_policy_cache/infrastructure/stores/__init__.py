"""Cache entry stores."""

from .entry_store import EntryStore

__all__ = ["EntryStore"]
