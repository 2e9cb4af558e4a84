"""StockQuantity value object.

Immutable numeric quantity with unit. Enforces non-negativity: stock can
never go below zero.
"""

from dataclasses import dataclass

from domain.shared.errors import InsufficientStockError, ValidationError


@dataclass(frozen=True)
class StockQuantity:
    """Value object for stock level with unit.

    Attributes:
        value: Numeric amount (must be >= 0)
        unit: Unit of measurement (e.g. "kg", "pcs", "l")

    Examples:
        >>> q = StockQuantity(10.0, "pcs")
        >>> q.subtract(4).value
        6.0

        >>> q.add(5).value
        15.0

    Raises:
        ValidationError: If value is negative or unit is blank.
    """

    value: float
    unit: str

    def __post_init__(self) -> None:
        """Validate quantity invariants."""
        if self.value < 0:
            raise ValidationError("Stock quantity cannot be negative")

        if not self.unit or not self.unit.strip():
            raise ValidationError("Unit is required")

    def subtract(self, quantity: float) -> "StockQuantity":
        """Return a new quantity reduced by ``quantity``.

        Raises:
            ValidationError: If quantity is negative.
            InsufficientStockError: If quantity exceeds the current value.
        """
        if quantity < 0:
            raise ValidationError("Cannot subtract negative quantity")
        if quantity > self.value:
            raise InsufficientStockError(
                "Insufficient stock",
                available=self.value,
                required=quantity,
                unit=self.unit,
            )
        return StockQuantity(self.value - quantity, self.unit)

    def add(self, quantity: float) -> "StockQuantity":
        """Return a new quantity increased by ``quantity``.

        Raises:
            ValidationError: If quantity is negative.
        """
        if quantity < 0:
            raise ValidationError("Cannot add negative quantity")
        return StockQuantity(self.value + quantity, self.unit)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.value:g}{self.unit}"
