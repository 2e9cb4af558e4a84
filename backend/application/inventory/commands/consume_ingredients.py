"""Consume ingredients command and handler.

Turns one ordered menu item into ingredient stock deductions using a
two-phase algorithm: validate every recipe line against live stock first,
then consume and persist the whole batch in one atomic ``save_all``.
No ingredient of a recipe is ever partially consumed.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from domain.inventory.core.entities import ConsumptionResult, MenuItem
from domain.inventory.core.ports import IIngredientRepository, IMenuItemRepository
from domain.inventory.core.services import (
    aggregate_requirements,
    apply_requirements,
    index_by_id,
)
from domain.shared.errors import ConcurrencyConflictError, NotFoundError, ValidationError
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class ConsumeIngredientsCommand:
    """
    Command: consume the ingredients of ``quantity`` portions of a menu item.

    Attributes:
        menu_item_id: Menu item being prepared
        quantity: Number of portions (must be > 0)
    """

    menu_item_id: str
    quantity: int


class ConsumeIngredientsCommandHandler:
    """
    Handler for ConsumeIngredientsCommand (the consumption use case).

    Concurrency: the application layer takes no locks. ``save_all`` rejects
    stale writes via the ingredient version; on conflict the handler
    re-reads, re-validates and retries (compare-and-swap with retry).
    """

    def __init__(
        self,
        menu_item_repository: IMenuItemRepository,
        ingredient_repository: IIngredientRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_wait: Optional[wait_base] = None,
    ):
        """
        Initialize handler.

        Args:
            menu_item_repository: Menu item repository port
            ingredient_repository: Ingredient repository port
            max_attempts: Attempts on optimistic concurrency conflicts
            retry_wait: tenacity wait strategy between attempts
        """
        self._menu_items = menu_item_repository
        self._ingredients = ingredient_repository
        self._max_attempts = max_attempts
        self._retry_wait = retry_wait or wait_exponential(multiplier=0.05, max=1)

    async def execute(
        self, command: ConsumeIngredientsCommand
    ) -> Result[List[ConsumptionResult]]:
        """
        Execute the consumption.

        Flow:
        1. Validate quantity (no repository access on failure)
        2. Load menu item
        3. Batch-load distinct ingredients of the recipe
        4. Pre-validate every line against stock
        5. Consume all lines
        6. Persist the batch atomically (retry on stale write)
        7. Return one ConsumptionResult per ingredient

        Returns:
            Ok(results) or Err(ValidationError | NotFoundError |
            InsufficientStockError | PersistenceError)
        """
        if command.quantity <= 0:
            return Err(ValidationError("Quantity must be positive"))

        logger.info(
            "Consuming ingredients",
            extra={"menu_item_id": command.menu_item_id, "quantity": command.quantity},
        )

        try:
            menu_item = await self._menu_items.find_by_id(command.menu_item_id)
            if menu_item is None:
                return Err(NotFoundError(f"Menu item {command.menu_item_id} not found"))

            results: List[ConsumptionResult] = []
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_attempts),
                wait=self._retry_wait,
                retry=retry_if_exception_type(ConcurrencyConflictError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            "Retrying consumption after concurrent stock update",
                            extra={
                                "menu_item_id": menu_item.id,
                                "attempt": attempt.retry_state.attempt_number,
                            },
                        )
                    results = await self._consume_once(menu_item, command.quantity)
        except Exception as e:
            logger.warning(
                "Ingredient consumption failed",
                extra={"menu_item_id": command.menu_item_id, "error": str(e)},
            )
            return to_err(e, "Failed to consume ingredients")

        logger.info(
            "Ingredients consumed",
            extra={
                "menu_item_id": command.menu_item_id,
                "ingredient_count": len(results),
                "reorder_count": sum(1 for r in results if r.needs_reorder),
            },
        )
        return Ok(results)

    async def _consume_once(
        self, menu_item: MenuItem, portions: int
    ) -> List[ConsumptionResult]:
        required = aggregate_requirements([(menu_item, portions)])
        ingredients = await self._ingredients.find_by_ids(list(required))

        # Validate the whole recipe before producing any updated aggregate
        updated = apply_requirements(required, index_by_id(ingredients))

        save_result = await self._ingredients.save_all(updated)
        if not save_result.ok:
            raise save_result.error

        return [
            ConsumptionResult.from_ingredient(ingredient, required[ingredient.id])
            for ingredient in updated
        ]


# Alias matching the domain vocabulary ("consumption use case")
ConsumptionUseCase = ConsumeIngredientsCommandHandler
