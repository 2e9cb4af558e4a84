"""Order fulfillment policy and submission states."""

from enum import Enum


class FulfillmentPolicy(str, Enum):
    """
    How an order's stock deduction behaves when a line cannot be served.

    ALL_OR_NOTHING: check the whole order first, persist, deduct in one
        batch; any deduction failure after persisting is a critical
        inconsistency.
    BEST_EFFORT: persist, then consume line by line; failed lines are
        reported and the rest are still consumed (no rollback).
    """

    ALL_OR_NOTHING = "all_or_nothing"
    BEST_EFFORT = "best_effort"

    @classmethod
    def parse(cls, raw: str) -> "FulfillmentPolicy":
        """Parse a config value (case-insensitive, '-' accepted for '_')."""
        normalized = raw.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown fulfillment policy {raw!r} (expected one of: {valid})")


class OrderSubmissionState(str, Enum):
    """States of the order submission state machine."""

    VALIDATING = "VALIDATING"
    CHECKING_AVAILABILITY = "CHECKING_AVAILABILITY"
    PERSISTING = "PERSISTING"
    DEDUCTING = "DEDUCTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CRITICAL_FAILED = "CRITICAL_FAILED"
