"""In-memory ingredient repository implementation.

Provides an in-memory implementation of IIngredientRepository for tests
and local runs. Uses a dictionary for storage with no external
dependencies.
"""

import asyncio
from copy import deepcopy
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from domain.inventory.core.entities import (
    DeductionRequest,
    DeductionResult,
    Ingredient,
    IngredientAvailability,
    MenuItem,
)
from domain.inventory.core.ports import IMenuItemRepository
from domain.inventory.core.services import (
    aggregate_requirements,
    apply_requirements,
    line_availability,
)
from domain.inventory.core.value_objects import IngredientId
from domain.shared.errors import (
    ConcurrencyConflictError,
    NotFoundError,
    ValidationError,
)
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)


class InMemoryIngredientRepository:
    """
    In-memory implementation of IIngredientRepository port.

    Writes (``save_all``, ``deduct_ingredients``) run under one
    ``asyncio.Lock`` and compare versions before writing, so a batch is
    either fully applied or not applied at all.

    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> menu_items = InMemoryMenuItemRepository()
        >>> repository = InMemoryIngredientRepository(menu_items)
        >>> await repository.add(Ingredient.create("bun", "Bun", 50, "pcs", 10, 20, 0.3))
        >>> (await repository.get_stock_level(IngredientId("bun"))).value
        50
    """

    def __init__(self, menu_item_repository: IMenuItemRepository) -> None:
        """
        Initialize repository with empty storage.

        Args:
            menu_item_repository: Recipe source for the batched endpoints
        """
        self._storage: Dict[IngredientId, Ingredient] = {}
        self._menu_items = menu_item_repository
        self._lock = asyncio.Lock()

    async def add(self, ingredient: Ingredient) -> None:
        self._storage[ingredient.id] = deepcopy(ingredient)

    async def find_by_id(self, ingredient_id: IngredientId) -> Optional[Ingredient]:
        ingredient = self._storage.get(ingredient_id)
        return deepcopy(ingredient) if ingredient is not None else None

    async def find_by_ids(self, ingredient_ids: Sequence[IngredientId]) -> List[Ingredient]:
        return [
            deepcopy(self._storage[ingredient_id])
            for ingredient_id in dict.fromkeys(ingredient_ids)
            if ingredient_id in self._storage
        ]

    async def save_all(self, ingredients: Sequence[Ingredient]) -> Result[None]:
        """
        Persist a batch if every ingredient still has its stored version.

        Returns:
            Ok(None), or Err(ConcurrencyConflictError) with nothing written
        """
        async with self._lock:
            stale = self._stale_ids(ingredients)
            if stale:
                logger.info(
                    "Stale ingredient write rejected",
                    extra={"ingredient_ids": stale},
                )
                return Err(
                    ConcurrencyConflictError(
                        f"Ingredients modified concurrently: {', '.join(stale)}"
                    )
                )
            self._write(ingredients)
        return Ok(None)

    async def check_availability(
        self, menu_item_ids: Sequence[str], quantities: Sequence[int]
    ) -> Result[List[IngredientAvailability]]:
        """
        Cumulative availability check.

        Lines are evaluated in order against the stock left after all
        previous lines, so two lines competing for the same ingredient
        are both accounted for.
        """
        if len(menu_item_ids) != len(quantities):
            return Err(ValidationError("Each menu item needs exactly one quantity"))

        try:
            lines = await self._load_lines(
                [DeductionRequest(menu_item_id, quantity)
                 for menu_item_id, quantity in zip(menu_item_ids, quantities)]
            )
            availability = line_availability(lines, self._storage)
        except Exception as e:
            return to_err(e, "Failed to check availability")

        return Ok(availability)

    async def deduct_ingredients(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        """Validate the whole batch, then deduct it atomically."""
        try:
            async with self._lock:
                required, updated = await self._plan(requests)
                self._write(updated)
        except Exception as e:
            return to_err(e, "Failed to deduct ingredients")

        logger.info(
            "Ingredients deducted",
            extra={"request_count": len(requests), "ingredient_count": len(updated)},
        )
        return Ok([DeductionResult.from_ingredient(i, required[i.id]) for i in updated])

    async def preview_deduction(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        """Same computation as ``deduct_ingredients``; storage is untouched."""
        try:
            required, updated = await self._plan(requests)
        except Exception as e:
            return to_err(e, "Failed to preview deduction")
        return Ok([DeductionResult.from_ingredient(i, required[i.id]) for i in updated])

    async def get_stock_level(self, ingredient_id: IngredientId) -> Result[float]:
        ingredient = self._storage.get(ingredient_id)
        if ingredient is None:
            return Err(NotFoundError(f"Ingredient {ingredient_id} not found"))
        return Ok(ingredient.get_stock())

    async def get_low_stock_alerts(self) -> Result[List[DeductionResult]]:
        return Ok(
            [
                DeductionResult.from_ingredient(ingredient, 0)
                for ingredient in self._storage.values()
                if ingredient.needs_reorder()
            ]
        )

    def clear(self) -> None:
        """Clear all ingredients (useful for testing)."""
        self._storage.clear()

    def count(self) -> int:
        return len(self._storage)

    # Internals

    async def _load_lines(
        self, requests: Sequence[DeductionRequest]
    ) -> List[Tuple[MenuItem, float]]:
        lines: List[Tuple[MenuItem, float]] = []
        for request in requests:
            if request.quantity <= 0:
                raise ValidationError(f"Invalid quantity for {request.menu_item_id}")
            menu_item = await self._menu_items.find_by_id(request.menu_item_id)
            if menu_item is None:
                raise NotFoundError(f"Menu item {request.menu_item_id} not found")
            lines.append((menu_item, request.quantity))
        return lines

    async def _plan(
        self, requests: Sequence[DeductionRequest]
    ) -> Tuple[Dict[IngredientId, float], List[Ingredient]]:
        required = aggregate_requirements(await self._load_lines(requests))
        return required, apply_requirements(required, self._storage)

    def _stale_ids(self, ingredients: Sequence[Ingredient]) -> List[str]:
        stale: List[str] = []
        for ingredient in ingredients:
            stored = self._storage.get(ingredient.id)
            if stored is None or stored.version != ingredient.version:
                stale.append(str(ingredient.id))
        return stale

    def _write(self, ingredients: Sequence[Ingredient]) -> None:
        for ingredient in ingredients:
            self._storage[ingredient.id] = replace(ingredient, version=ingredient.version + 1)
