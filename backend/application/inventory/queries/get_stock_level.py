"""Get stock level query - current stock of one ingredient."""

from dataclasses import dataclass

from domain.inventory.core.ports import IIngredientRepository
from domain.inventory.core.value_objects import IngredientId
from domain.shared.result import Result, to_err


@dataclass(frozen=True)
class GetStockLevelQuery:
    """Query: current stock of ``ingredient_id``."""

    ingredient_id: str


class GetStockLevelQueryHandler:
    """Handler for GetStockLevelQuery."""

    def __init__(self, repository: IIngredientRepository):
        self._repository = repository

    async def handle(self, query: GetStockLevelQuery) -> Result[float]:
        try:
            return await self._repository.get_stock_level(IngredientId.create(query.ingredient_id))
        except Exception as e:
            return to_err(e, "Failed to read stock level")
