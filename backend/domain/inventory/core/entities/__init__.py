"""Inventory entities and aggregate roots."""

from .ingredient import Ingredient
from .menu_item import MenuItem
from .records import (
    ConsumptionResult,
    DeductionRequest,
    DeductionResult,
    IngredientAvailability,
    IngredientImpact,
    LowStockAlert,
)

__all__ = [
    "ConsumptionResult",
    "DeductionRequest",
    "DeductionResult",
    "Ingredient",
    "IngredientAvailability",
    "IngredientImpact",
    "LowStockAlert",
    "MenuItem",
]
