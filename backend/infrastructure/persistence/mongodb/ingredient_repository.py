"""MongoDB implementation of ingredient repository.

Batched writes run in a multi-document transaction and every update is
conditioned on the stored ``version`` (compare-and-set). Requires a
replica set or Atlas cluster; standalone servers do not support
transactions.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

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
    index_by_id,
    line_availability,
)
from domain.inventory.core.value_objects import IngredientId
from domain.shared.errors import (
    ConcurrencyConflictError,
    InventoryDomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from domain.shared.result import Err, Ok, Result, to_err
from infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)

DEDUCT_MAX_ATTEMPTS = 3


def _is_write_conflict(error: Optional[BaseException]) -> bool:
    return isinstance(error, PyMongoError) and error.has_error_label("TransientTransactionError")


class MongoIngredientRepository(MongoBaseRepository[Ingredient]):
    """
    MongoDB implementation of ingredient repository.

    Document Schema:
    {
        "_id": "bun",
        "name": "Bun",
        "current_stock": 50.0,
        "unit": "pcs",
        "min_stock": 10.0,
        "reorder_point": 20.0,
        "cost_per_unit": 0.3,
        "version": 4
    }

    Indexes:
    - _id: Unique index (automatic)
    """

    def __init__(
        self,
        menu_item_repository: IMenuItemRepository,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        """
        Initialize repository.

        Args:
            menu_item_repository: Recipe source for the batched endpoints
            client: Motor client (if None, creates new one from config)
        """
        super().__init__(client)
        self._menu_items = menu_item_repository

    @property
    def collection_name(self) -> str:
        return "ingredients"

    # ============================================================
    # Document Mapping (Domain ↔ MongoDB)
    # ============================================================

    def to_document(self, entity: Ingredient) -> Dict[str, Any]:
        return {
            "_id": str(entity.id),
            "name": entity.name,
            "current_stock": entity.get_stock(),
            "unit": entity.get_unit(),
            "min_stock": entity.min_stock,
            "reorder_point": entity.reorder_point,
            "cost_per_unit": entity.cost_per_unit,
            "version": entity.version,
        }

    def from_document(self, doc: Dict[str, Any]) -> Ingredient:
        try:
            return Ingredient.create(
                id=doc["_id"],
                name=doc["name"],
                current_stock=float(doc["current_stock"]),
                unit=doc["unit"],
                min_stock=float(doc["min_stock"]),
                reorder_point=float(doc["reorder_point"]),
                cost_per_unit=float(doc["cost_per_unit"]),
                version=int(doc.get("version", 0)),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise PersistenceError(f"Invalid ingredient document {doc.get('_id')}: {e}") from e

    # ============================================================
    # Repository Methods
    # ============================================================

    async def add(self, ingredient: Ingredient) -> None:
        await self._replace_one(self.to_document(ingredient))

    async def find_by_id(self, ingredient_id: IngredientId) -> Optional[Ingredient]:
        doc = await self._find_one({"_id": str(ingredient_id)})
        return self.from_document(doc) if doc is not None else None

    async def find_by_ids(self, ingredient_ids: Sequence[IngredientId]) -> List[Ingredient]:
        wanted = [str(i) for i in dict.fromkeys(ingredient_ids)]
        docs = await self._find_many({"_id": {"$in": wanted}})
        by_id = {doc["_id"]: self.from_document(doc) for doc in docs}
        return [by_id[i] for i in wanted if i in by_id]

    async def save_all(self, ingredients: Sequence[Ingredient]) -> Result[None]:
        """
        Persist a batch in one transaction, conditioned on each version.

        Returns:
            Ok(None), Err(ConcurrencyConflictError) if any version moved
            (the transaction is aborted), Err(PersistenceError) otherwise
        """
        try:
            await self._write_batch(ingredients)
        except Exception as e:
            return to_err(e, "Failed to save ingredients")
        return Ok(None)

    async def check_availability(
        self, menu_item_ids: Sequence[str], quantities: Sequence[int]
    ) -> Result[List[IngredientAvailability]]:
        if len(menu_item_ids) != len(quantities):
            return Err(ValidationError("Each menu item needs exactly one quantity"))

        try:
            lines = await self._load_lines(
                [DeductionRequest(m, q) for m, q in zip(menu_item_ids, quantities)]
            )
            stock = index_by_id(
                await self.find_by_ids(list(aggregate_requirements(lines)))
            )
            availability = line_availability(lines, stock)
        except Exception as e:
            return to_err(e, "Failed to check availability")

        return Ok(availability)

    async def deduct_ingredients(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        """
        Validate and deduct the whole batch in one transaction.

        A concurrent writer causes a re-read and re-plan, up to
        ``DEDUCT_MAX_ATTEMPTS`` times.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(DEDUCT_MAX_ATTEMPTS),
                retry=retry_if_exception_type(ConcurrencyConflictError),
                reraise=True,
            ):
                with attempt:
                    required, updated = await self._plan(requests)
                    await self._write_batch(updated)
        except Exception as e:
            return to_err(e, "Failed to deduct ingredients")

        return Ok([DeductionResult.from_ingredient(i, required[i.id]) for i in updated])

    async def preview_deduction(
        self, requests: Sequence[DeductionRequest]
    ) -> Result[List[DeductionResult]]:
        try:
            required, updated = await self._plan(requests)
        except Exception as e:
            return to_err(e, "Failed to preview deduction")
        return Ok([DeductionResult.from_ingredient(i, required[i.id]) for i in updated])

    async def get_stock_level(self, ingredient_id: IngredientId) -> Result[float]:
        try:
            ingredient = await self.find_by_id(ingredient_id)
        except Exception as e:
            return to_err(e, "Failed to read stock level")
        if ingredient is None:
            return Err(NotFoundError(f"Ingredient {ingredient_id} not found"))
        return Ok(ingredient.get_stock())

    async def get_low_stock_alerts(self) -> Result[List[DeductionResult]]:
        try:
            docs = await self._find_many(
                {"$expr": {"$lte": ["$current_stock", "$reorder_point"]}}
            )
            return Ok([DeductionResult.from_ingredient(self.from_document(d), 0) for d in docs])
        except Exception as e:
            return to_err(e, "Failed to load low stock alerts")

    # ============================================================
    # Internals
    # ============================================================

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
        ingredients = index_by_id(await self.find_by_ids(list(required)))
        return required, apply_requirements(required, ingredients)

    async def _write_batch(self, ingredients: Sequence[Ingredient]) -> None:
        """
        Conditional update of every ingredient inside one transaction.

        Raises:
            ConcurrencyConflictError: A stored version differs (transaction aborted)
            PersistenceError: Driver failure
        """
        try:
            async with await self._client.start_session() as session:
                async with session.start_transaction():
                    for ingredient in ingredients:
                        matched = await self._update_one(
                            {"_id": str(ingredient.id), "version": ingredient.version},
                            {
                                "$set": {"current_stock": ingredient.get_stock()},
                                "$inc": {"version": 1},
                            },
                            session=session,
                        )
                        if matched == 0:
                            raise ConcurrencyConflictError(
                                f"Ingredient {ingredient.id} modified concurrently"
                            )
        except PersistenceError as e:
            # Write conflict with another transaction surfaces as a driver error
            if _is_write_conflict(e.__cause__):
                raise ConcurrencyConflictError(f"Ingredients modified concurrently: {e}") from e
            raise
        except InventoryDomainError:
            raise
        except PyMongoError as e:
            if _is_write_conflict(e):
                raise ConcurrencyConflictError(f"Ingredients modified concurrently: {e}") from e
            raise self._failure("transaction", e) from e
        except Exception as e:
            raise self._failure("transaction", e) from e
