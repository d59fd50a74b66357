"""Invalidation pattern value object.

ONLY key matching - reusable key predicates handed to
``CacheManager.invalidate``.

Following maximum separation architecture - one file = one purpose.
"""

import fnmatch
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Optional


class PatternType(Enum):
    """How an invalidation pattern is interpreted."""

    EXACT = "exact"
    WILDCARD = "wildcard"  # shell-style * and ?
    REGEX = "regex"
    PREFIX = "prefix"
    SUFFIX = "suffix"


_LITERAL_TEMPLATES = {
    PatternType.EXACT: "^{}$",
    PatternType.PREFIX: "^{}",
    PatternType.SUFFIX: "{}$",
}


@dataclass(frozen=True)
class InvalidationPattern:
    """Compiled key predicate.

    Patterns are callable, so any pattern can be handed to
    ``CacheManager.invalidate`` as its key predicate. Keys that are not
    strings are matched through ``str(key)``.
    """

    pattern: str
    pattern_type: PatternType
    case_sensitive: bool = True
    _compiled: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.pattern:
            raise ValueError("Invalidation pattern must not be empty")

        object.__setattr__(self, "_compiled", self._build_regex())

    @classmethod
    def exact(cls, key: str, case_sensitive: bool = True) -> "InvalidationPattern":
        """Match one key exactly."""
        return cls(key, PatternType.EXACT, case_sensitive)

    @classmethod
    def wildcard(cls, glob: str, case_sensitive: bool = True) -> "InvalidationPattern":
        """Match keys against a glob such as ``tenant:*:settings``."""
        return cls(glob, PatternType.WILDCARD, case_sensitive)

    @classmethod
    def regex(cls, expression: str, case_sensitive: bool = True) -> "InvalidationPattern":
        """Match keys searched by a regular expression."""
        return cls(expression, PatternType.REGEX, case_sensitive)

    @classmethod
    def prefix(cls, start: str, case_sensitive: bool = True) -> "InvalidationPattern":
        """Match keys starting with ``start``."""
        return cls(start, PatternType.PREFIX, case_sensitive)

    @classmethod
    def suffix(cls, end: str, case_sensitive: bool = True) -> "InvalidationPattern":
        """Match keys ending with ``end``."""
        return cls(end, PatternType.SUFFIX, case_sensitive)

    @classmethod
    def entity_keys(cls, entity: str, entity_id: str) -> "InvalidationPattern":
        """Create pattern matching every key scoped to one entity.

        ``entity_keys("customer", "42")`` matches ``customer:42:plan`` and
        ``customer:42:subscriptions`` but not ``customer:420:plan``.
        """
        return cls.prefix(f"{entity}:{entity_id}:")

    def matches(self, cache_key: Hashable) -> bool:
        return self._compiled.search(str(cache_key)) is not None

    def __call__(self, cache_key: Hashable) -> bool:
        return self.matches(cache_key)

    def _build_regex(self) -> re.Pattern:
        if self.pattern_type in _LITERAL_TEMPLATES:
            source = _LITERAL_TEMPLATES[self.pattern_type].format(re.escape(self.pattern))
        elif self.pattern_type == PatternType.WILDCARD:
            source = fnmatch.translate(self.pattern)
        else:
            source = self.pattern

        try:
            return re.compile(source, 0 if self.case_sensitive else re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{self.pattern}': {e}") from e

    def __str__(self) -> str:
        mode = "" if self.case_sensitive else ", ignore case"
        return f"{self.pattern_type.value}({self.pattern!r}{mode})"
