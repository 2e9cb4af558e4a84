"""Ingredient repository port (interface).

Defines contract for ingredient persistence and the batched
availability/deduction endpoints used by the deduction service.
Follows the Dependency Inversion Principle: domain defines the port,
infrastructure provides the implementation.
"""

from typing import List, Optional, Protocol, Sequence

from domain.shared.result import Result

from ..entities import (
    DeductionRequest,
    DeductionResult,
    Ingredient,
    IngredientAvailability,
)
from ..value_objects import IngredientId


class IIngredientRepository(Protocol):
    """
    Interface for ingredient persistence operations.

    Implementations:
    - InMemoryIngredientRepository (tests, local runs)
    - MongoIngredientRepository (production)

    Concurrency contract:
        ``save_all`` is atomic and isolated per call. Every ingredient
        carries the ``version`` it was read with; if any stored version
        differs, nothing is written and ``ConcurrencyConflictError`` is
        returned. Written ingredients get ``version + 1``.

    Example usage (application layer):
        >>> ingredients = await repository.find_by_ids([IngredientId("bun")])
        >>> updated = [i.consume(2) for i in ingredients]
        >>> result = await repository.save_all(updated)
        >>> if not result.ok:
        ...     print(result.error)
    """

    async def add(self, ingredient: Ingredient) -> None:
        """Insert or overwrite an ingredient (seeding, admin tooling)."""
        ...

    async def find_by_id(self, ingredient_id: IngredientId) -> Optional[Ingredient]:
        """
        Retrieve ingredient by ID.

        Returns:
            Ingredient if found, None otherwise

        Raises:
            PersistenceError: On storage failure
        """
        ...

    async def find_by_ids(self, ingredient_ids: Sequence[IngredientId]) -> List[Ingredient]:
        """
        Retrieve several ingredients in one call.

        Missing ids are simply absent from the returned list; callers
        decide whether that is an error.

        Raises:
            PersistenceError: On storage failure
        """
        ...

    async def save_all(self, ingredients: Sequence[Ingredient]) -> Result[None]:
        """
        Atomically persist a batch of updated ingredients.

        Returns:
            Ok(None) on success,
            Err(ConcurrencyConflictError) on a stale write,
            Err(PersistenceError) on storage failure
        """
        ...

    async def check_availability(
        self, menu_item_ids: Sequence[str], quantities: Sequence[int]
    ) -> Result[List[IngredientAvailability]]:
        """
        Check whether each menu item can be produced in the paired quantity.

        Returns:
            One IngredientAvailability per requested menu item
        """
        ...

    async def deduct_ingredients(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        """
        Permanently deduct stock for a confirmed batch of menu items.

        All requests are validated before any stock changes; one result
        per affected ingredient.
        """
        ...

    async def preview_deduction(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        """
        Simulate ``deduct_ingredients`` without persisting anything.

        Safe to call repeatedly; never changes stored stock.
        """
        ...

    async def get_stock_level(self, ingredient_id: IngredientId) -> Result[float]:
        """Current stock of one ingredient (Err(NotFoundError) if absent)."""
        ...

    async def get_low_stock_alerts(self) -> Result[List[DeductionResult]]:
        """All ingredients at or below their reorder point."""
        ...
