"""Consumption, deduction and alert records.

Explicit output contracts shared by the commit and preview paths.
All records are frozen and validated on construction so a malformed
repository response fails at the boundary instead of deep in a caller.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from domain.shared.errors import ValidationError

from .ingredient import Ingredient


def _check_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value}")


@dataclass(frozen=True)
class ConsumptionResult:
    """Outcome of consuming one ingredient for one menu item."""

    ingredient_id: str
    consumed_quantity: float
    remaining_stock: float
    unit: str
    is_low_stock: bool
    needs_reorder: bool
    ingredient_name: Optional[str] = None

    def __post_init__(self) -> None:
        _check_non_negative("consumed_quantity", self.consumed_quantity)
        _check_non_negative("remaining_stock", self.remaining_stock)

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient, consumed: float) -> "ConsumptionResult":
        """Build the result from the updated aggregate."""
        return cls(
            ingredient_id=str(ingredient.id),
            ingredient_name=ingredient.name,
            consumed_quantity=consumed,
            remaining_stock=ingredient.get_stock(),
            unit=ingredient.get_unit(),
            is_low_stock=ingredient.is_low_stock(),
            needs_reorder=ingredient.needs_reorder(),
        )


@dataclass(frozen=True)
class DeductionRequest:
    """Portions of one menu item to deduct (or preview)."""

    menu_item_id: str
    quantity: int


@dataclass(frozen=True)
class DeductionResult:
    """Per-ingredient result of a batched deduction or preview."""

    ingredient_id: str
    ingredient_name: str
    consumed_quantity: float
    remaining_stock: float
    unit: str
    is_low_stock: bool
    needs_reorder: bool
    reorder_point: float

    def __post_init__(self) -> None:
        _check_non_negative("consumed_quantity", self.consumed_quantity)
        _check_non_negative("remaining_stock", self.remaining_stock)

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient, consumed: float) -> "DeductionResult":
        return cls(
            ingredient_id=str(ingredient.id),
            ingredient_name=ingredient.name,
            consumed_quantity=consumed,
            remaining_stock=ingredient.get_stock(),
            unit=ingredient.get_unit(),
            is_low_stock=ingredient.is_low_stock(),
            needs_reorder=ingredient.needs_reorder(),
            reorder_point=ingredient.reorder_point,
        )


@dataclass(frozen=True)
class IngredientImpact:
    """User-facing impact of an order on one ingredient."""

    ingredient_id: str
    ingredient_name: str
    consumed_quantity: float
    remaining_stock: float
    unit: str
    is_low_stock: bool
    needs_reorder: bool

    def __post_init__(self) -> None:
        _check_non_negative("consumed_quantity", self.consumed_quantity)
        _check_non_negative("remaining_stock", self.remaining_stock)

    @classmethod
    def from_deduction(cls, result: DeductionResult) -> "IngredientImpact":
        return cls(
            ingredient_id=result.ingredient_id,
            ingredient_name=result.ingredient_name,
            consumed_quantity=result.consumed_quantity,
            remaining_stock=result.remaining_stock,
            unit=result.unit,
            is_low_stock=result.is_low_stock,
            needs_reorder=result.needs_reorder,
        )

    def warning(self) -> str:
        """Human-readable low-stock warning line."""
        return (
            f"⚠️ {self.ingredient_name}: {self.remaining_stock:g} {self.unit} "
            "remaining (reorder needed)"
        )


@dataclass(frozen=True)
class IngredientAvailability:
    """Whether a menu item can be produced in the requested quantity."""

    menu_item_id: str
    menu_item_name: str
    available: bool
    missing_ingredients: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LowStockAlert:
    """Alert payload for one ingredient that crossed a threshold."""

    ingredient_id: str
    ingredient_name: str
    current_stock: float
    min_stock: float
    unit: str
    reorder_point: float
    cost_per_unit: float

    @property
    def is_critical(self) -> bool:
        """At or below the reorder point."""
        return self.current_stock <= self.reorder_point

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient) -> "LowStockAlert":
        return cls(
            ingredient_id=str(ingredient.id),
            ingredient_name=ingredient.name,
            current_stock=ingredient.get_stock(),
            min_stock=ingredient.min_stock,
            unit=ingredient.get_unit(),
            reorder_point=ingredient.reorder_point,
            cost_per_unit=ingredient.cost_per_unit,
        )
