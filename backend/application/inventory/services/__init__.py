"""Inventory application services."""

from .ingredient_deduction_service import IngredientDeductionService
from .low_stock_notifier import LowStockNotifier

__all__ = [
    "IngredientDeductionService",
    "LowStockNotifier",
]
