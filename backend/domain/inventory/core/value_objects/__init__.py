"""Core value objects for the inventory domain.

Immutable value objects with value-based equality.
"""

from .ingredient_id import IngredientId
from .ingredient_reference import IngredientReference
from .stock_quantity import StockQuantity

__all__ = [
    "IngredientId",
    "IngredientReference",
    "StockQuantity",
]
