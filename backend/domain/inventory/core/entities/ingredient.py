"""Ingredient aggregate root - stock-tracked inventory item."""

from dataclasses import dataclass, replace

from domain.shared.errors import InsufficientStockError, ValidationError

from ..value_objects import IngredientId, StockQuantity


@dataclass(frozen=True)
class Ingredient:
    """
    Aggregate Root: ingredient held in inventory.

    Invariants (checked by ``create`` only, thresholds never change):
    - Name is non-empty
    - min_stock >= 0
    - reorder_point >= min_stock
    - cost_per_unit > 0
    - Stock never negative (enforced by StockQuantity)

    Mutability: none. ``consume`` and ``replenish`` return a new instance
    with the same identity, thresholds and version; callers persist it.

    ``version`` is the storage concurrency token. The domain carries it
    through unchanged; repositories compare it on write.
    """

    id: IngredientId
    name: str
    stock: StockQuantity
    min_stock: float
    reorder_point: float
    cost_per_unit: float
    version: int = 0

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        current_stock: float,
        unit: str,
        min_stock: float,
        reorder_point: float,
        cost_per_unit: float,
        version: int = 0,
    ) -> "Ingredient":
        """
        Create a validated Ingredient.

        Args:
            id: Unique identifier
            name: Display name (non-empty)
            current_stock: Initial stock level (>= 0)
            unit: Unit of measurement (e.g. "kg", "pcs")
            min_stock: Low-stock threshold (>= 0)
            reorder_point: Reorder threshold (>= min_stock)
            cost_per_unit: Cost per unit (> 0)
            version: Storage concurrency token

        Returns:
            New Ingredient

        Raises:
            ValidationError: If any invariant is violated
        """
        if not name or not name.strip():
            raise ValidationError("Ingredient name is required")
        if min_stock < 0:
            raise ValidationError("Min stock cannot be negative")
        if reorder_point < min_stock:
            raise ValidationError("Reorder point must be greater than or equal to min stock")
        if cost_per_unit <= 0:
            raise ValidationError("Cost per unit must be positive")

        return cls(
            id=IngredientId.create(id),
            name=name,
            stock=StockQuantity(current_stock, unit),
            min_stock=min_stock,
            reorder_point=reorder_point,
            cost_per_unit=cost_per_unit,
            version=version,
        )

    # Queries

    def get_stock(self) -> float:
        """Current stock level."""
        return self.stock.value

    def get_unit(self) -> str:
        """Unit of measurement."""
        return self.stock.unit

    def is_low_stock(self) -> bool:
        """True if stock is at or below min_stock."""
        return self.get_stock() <= self.min_stock

    def needs_reorder(self) -> bool:
        """True if stock is at or below reorder_point."""
        return self.get_stock() <= self.reorder_point

    def calculate_cost(self, quantity: float) -> float:
        """Total cost of ``quantity`` units."""
        return self.cost_per_unit * quantity

    # Commands

    def consume(self, quantity: float) -> "Ingredient":
        """
        Deduct ``quantity`` from stock.

        Args:
            quantity: Amount to deduct (0 <= quantity <= stock)

        Returns:
            New Ingredient with reduced stock

        Raises:
            ValidationError: If quantity is negative
            InsufficientStockError: If quantity exceeds current stock
        """
        try:
            new_stock = self.stock.subtract(quantity)
        except InsufficientStockError:
            raise InsufficientStockError.for_ingredient(
                self.name, self.get_stock(), quantity, self.get_unit()
            ) from None
        return replace(self, stock=new_stock)

    def replenish(self, quantity: float) -> "Ingredient":
        """
        Add ``quantity`` to stock.

        Raises:
            ValidationError: If quantity is negative
        """
        return replace(self, stock=self.stock.add(quantity))
