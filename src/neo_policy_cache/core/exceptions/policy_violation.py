"""Eviction policy contract violation.

ONLY policy contract errors - raised when an eviction policy selects a
victim that is not in the store, or selects nothing while room is needed.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Hashable, Optional

from .cache_error import CacheError


class PolicyViolation(CacheError):
    """Eviction policy broke its contract.

    This is a programming error in the policy, never an environmental
    condition. The triggering operation fails and the store is untouched.
    """

    default_error_code = "CACHE_POLICY_VIOLATION"

    def __init__(
        self,
        policy_name: str,
        reason: str,
        victim: Optional[Hashable] = None,
        pending_key: Optional[Any] = None
    ):
        self.policy_name = policy_name
        self.reason = reason
        self.victim = victim
        self.pending_key = pending_key

        super().__init__(
            f"Eviction policy '{policy_name}' violated its contract: {reason}",
            details={
                "policy": policy_name,
                "victim": repr(victim) if victim is not None else None,
                "pending_key": repr(pending_key) if pending_key is not None else None,
            }
        )

    @classmethod
    def victim_not_present(
        cls,
        policy_name: str,
        victim: Hashable,
        pending_key: Optional[Any] = None
    ) -> "PolicyViolation":
        """Create violation for a victim key missing from the store."""
        return cls(
            policy_name,
            f"selected victim {victim!r} is not present in the store",
            victim=victim,
            pending_key=pending_key,
        )

    @classmethod
    def no_victim(cls, policy_name: str, pending_key: Optional[Any] = None) -> "PolicyViolation":
        """Create violation for a policy that selects nothing at capacity."""
        return cls(
            policy_name,
            "selected no victim while the store is at capacity",
            pending_key=pending_key,
        )
