"""
Domain exceptions.

Typed exceptions for the inventory and ordering contexts.
Every exception carries a stable ``kind`` so callers that only see the
``Err`` side of a Result can branch on the failure category.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class InventoryDomainError(Exception):
    """
    Base exception for all inventory/ordering errors.

    Attributes:
        kind: Stable machine-readable category
        retryable: Whether the caller may retry the same operation
    """

    kind = "domain_error"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════
# INPUT / LOOKUP EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(InventoryDomainError):
    """
    Input validation failed.

    Raised when:
    - Empty identifiers or names
    - Negative quantities, thresholds or prices
    - Reorder point below minimum stock

    Example:
        >>> raise ValidationError("Ingredient name is required")
    """

    kind = "validation"


class NotFoundError(InventoryDomainError):
    """
    Menu item or ingredient not found.

    Example:
        >>> raise NotFoundError("Menu item burger not found")
    """

    kind = "not_found"


# ═══════════════════════════════════════════════════════════
# STOCK EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InsufficientStockError(InventoryDomainError):
    """
    Not enough stock to satisfy a consumption.

    Carries the offending ingredient and the amounts involved when known.
    Aggregated availability failures (several menu items at once) only
    carry the message.

    Example:
        >>> raise InsufficientStockError.for_ingredient("Patty", 3, 4, "pcs")
    """

    kind = "insufficient_stock"

    def __init__(
        self,
        message: str,
        ingredient_name: Optional[str] = None,
        available: Optional[float] = None,
        required: Optional[float] = None,
        unit: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.ingredient_name = ingredient_name
        self.available = available
        self.required = required
        self.unit = unit

    @classmethod
    def for_ingredient(
        cls, ingredient_name: str, available: float, required: float, unit: str
    ) -> "InsufficientStockError":
        """Build the error for a single ingredient shortfall."""
        return cls(
            f"Insufficient stock for {ingredient_name}. "
            f"Available: {available:g}{unit}, Required: {required:g}{unit}",
            ingredient_name=ingredient_name,
            available=available,
            required=required,
            unit=unit,
        )


# ═══════════════════════════════════════════════════════════
# PERSISTENCE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class PersistenceError(InventoryDomainError):
    """
    Repository I/O failure (network, timeout, storage error).

    The only category a caller may retry as-is.
    """

    kind = "persistence"
    retryable = True


class ConcurrencyConflictError(PersistenceError):
    """
    Optimistic concurrency check rejected a stale write.

    Raised by ``save_all`` when at least one ingredient was modified by
    another writer since it was read. Nothing in the batch is written.
    """

    kind = "concurrency_conflict"


class CriticalInconsistencyError(InventoryDomainError):
    """
    Order persisted but inventory was not (fully) updated.

    Must be logged distinctly and reconciled manually; the deduction is
    never retried on its own because the order is already committed.
    """

    kind = "critical_inconsistency"

    def __init__(self, message: str, order_id: str, cause: Optional[str] = None) -> None:
        super().__init__(message)
        self.order_id = order_id
        self.cause = cause
