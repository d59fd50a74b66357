"""Cache lookup result value object."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheLookup:
    """Result of a lookup.

    ``found`` is True only when the value was already cached; ``loaded``
    is True when the value was produced by a loader on this miss.
    """

    found: bool
    value: Any = None
    loaded: bool = False

    @property
    def has_value(self) -> bool:
        return self.found or self.loaded
