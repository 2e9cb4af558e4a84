"""CQRS Commands for inventory domain."""

from .consume_ingredients import (
    ConsumeIngredientsCommand,
    ConsumeIngredientsCommandHandler,
    ConsumptionUseCase,
)
from .replenish_ingredient import (
    ReplenishIngredientCommand,
    ReplenishIngredientCommandHandler,
)

__all__ = [
    "ConsumeIngredientsCommand",
    "ConsumeIngredientsCommandHandler",
    "ConsumptionUseCase",
    "ReplenishIngredientCommand",
    "ReplenishIngredientCommandHandler",
]
