"""Ingredient deduction service.

Batches a whole order's lines around the ingredient repository's batched
availability, deduction and preview endpoints.
"""

from typing import List, Sequence
import logging

from domain.inventory.core.entities import DeductionRequest, IngredientImpact
from domain.inventory.core.ports import IIngredientRepository
from domain.ordering.core.entities import OrderItemDTO
from domain.shared.errors import InsufficientStockError
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)


class IngredientDeductionService:
    """
    Availability check, preview and commit of ingredient deductions.

    - ``check_availability``: no side effects, one aggregated error
    - ``preview_impact``: never mutates stock, safe to repeat
    - ``deduct_ingredients``: destructive, call once per confirmed order

    Example:
        >>> service = IngredientDeductionService(ingredient_repository)
        >>> check = await service.check_availability(order.items)
        >>> if check.ok:
        ...     impacts = await service.deduct_ingredients(order.items)
    """

    def __init__(self, ingredient_repository: IIngredientRepository):
        self._ingredients = ingredient_repository

    async def check_availability(self, items: Sequence[OrderItemDTO]) -> Result[bool]:
        """
        Check that every order line can be produced.

        Returns:
            Ok(True), or Err(InsufficientStockError) naming every
            unavailable menu item, or Err(PersistenceError)
        """
        try:
            availability = await self._ingredients.check_availability(
                [item.menu_item_id for item in items],
                [item.quantity for item in items],
            )
            if not availability.ok:
                return availability

            unavailable = [a for a in availability.value if not a.available]
        except Exception as e:
            return to_err(e, "Failed to check ingredient availability")

        if unavailable:
            names = ", ".join(a.menu_item_name for a in unavailable)
            logger.info(
                "Order lines unavailable",
                extra={
                    "menu_item_ids": [a.menu_item_id for a in unavailable],
                    "missing": {a.menu_item_id: a.missing_ingredients for a in unavailable},
                },
            )
            return Err(
                InsufficientStockError(
                    f"Insufficient ingredients for: {names}. Please check inventory."
                )
            )

        return Ok(True)

    async def deduct_ingredients(
        self, items: Sequence[OrderItemDTO]
    ) -> Result[List[IngredientImpact]]:
        """Deduct stock for a confirmed order (destructive)."""
        return await self._run(items, preview=False)

    async def preview_impact(
        self, items: Sequence[OrderItemDTO]
    ) -> Result[List[IngredientImpact]]:
        """Simulate the deduction without changing stock."""
        return await self._run(items, preview=True)

    async def _run(
        self, items: Sequence[OrderItemDTO], preview: bool
    ) -> Result[List[IngredientImpact]]:
        if not items:
            return Ok([])

        requests: List[DeductionRequest] = [item.to_deduction_request() for item in items]
        action = "preview" if preview else "deduct"

        try:
            if preview:
                outcome = await self._ingredients.preview_deduction(requests)
            else:
                outcome = await self._ingredients.deduct_ingredients(requests)
            if not outcome.ok:
                return outcome

            impacts = [IngredientImpact.from_deduction(r) for r in outcome.value]
        except Exception as e:
            return to_err(e, f"Failed to {action} ingredients")

        logger.debug(
            "Ingredient impact computed",
            extra={"action": action, "ingredient_count": len(impacts)},
        )
        return Ok(impacts)
