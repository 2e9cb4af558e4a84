"""Replenish ingredient command and handler.

Restocks one ingredient (delivery received, manual correction).
"""

from dataclasses import dataclass
import logging

from domain.inventory.core.entities import Ingredient
from domain.inventory.core.ports import IIngredientRepository
from domain.inventory.core.value_objects import IngredientId
from domain.shared.errors import NotFoundError, ValidationError
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplenishIngredientCommand:
    """
    Command: add stock to an ingredient.

    Attributes:
        ingredient_id: Ingredient to restock
        quantity: Amount to add, in the ingredient's unit (must be >= 0)
    """

    ingredient_id: str
    quantity: float


class ReplenishIngredientCommandHandler:
    """Handler for ReplenishIngredientCommand."""

    def __init__(self, ingredient_repository: IIngredientRepository):
        self._ingredients = ingredient_repository

    async def handle(self, command: ReplenishIngredientCommand) -> Result[Ingredient]:
        """
        Execute the restock.

        Returns:
            Ok(updated ingredient) or Err(ValidationError | NotFoundError |
            PersistenceError)
        """
        if command.quantity < 0:
            return Err(ValidationError("Cannot add negative quantity"))

        try:
            ingredient_id = IngredientId.create(command.ingredient_id)
            ingredient = await self._ingredients.find_by_id(ingredient_id)
            if ingredient is None:
                return Err(NotFoundError(f"Ingredient {command.ingredient_id} not found"))

            updated = ingredient.replenish(command.quantity)
            save_result = await self._ingredients.save_all([updated])
            if not save_result.ok:
                return save_result
        except Exception as e:
            return to_err(e, "Failed to replenish ingredient")

        logger.info(
            "Ingredient replenished",
            extra={
                "ingredient_id": command.ingredient_id,
                "added": command.quantity,
                "stock": updated.get_stock(),
            },
        )
        return Ok(updated)
