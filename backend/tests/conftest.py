"""Shared test fixtures.

Builds small, fully in-memory inventories. Fixtures hand out fresh
repositories per test so no state leaks between tests.
"""

from pathlib import Path
from typing import Callable

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from domain.inventory.core.entities import Ingredient, MenuItem
from domain.inventory.core.value_objects import IngredientId, IngredientReference
from infrastructure.persistence.in_memory import (
    InMemoryIngredientRepository,
    InMemoryMenuItemRepository,
    InMemoryOrderRepository,
)

# .env.test overrides for integration runs (e.g. REPOSITORY_BACKEND=mongodb)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture
def make_ingredient() -> Callable[..., Ingredient]:
    """Factory for valid ingredients with overridable fields."""

    def _make(
        id: str = "patty",
        name: str = "Patty",
        current_stock: float = 10,
        unit: str = "pcs",
        min_stock: float = 2,
        reorder_point: float = 5,
        cost_per_unit: float = 1.5,
        version: int = 0,
    ) -> Ingredient:
        return Ingredient.create(
            id=id,
            name=name,
            current_stock=current_stock,
            unit=unit,
            min_stock=min_stock,
            reorder_point=reorder_point,
            cost_per_unit=cost_per_unit,
            version=version,
        )

    return _make


@pytest.fixture
def make_menu_item() -> Callable[..., MenuItem]:
    """Factory: ``make_menu_item("burger", "Burger", patty=1, bun=2)``."""

    def _make(id: str, name: str, unit: str = "pcs", **amounts: float) -> MenuItem:
        return MenuItem.create(
            id=id,
            name=name,
            references=[
                IngredientReference(IngredientId(ingredient_id), quantity, unit)
                for ingredient_id, quantity in amounts.items()
            ],
        )

    return _make


@pytest.fixture
def burger(make_menu_item: Callable[..., MenuItem]) -> MenuItem:
    """Burger = 1 patty + 2 buns."""
    return make_menu_item("burger", "Burger", patty=1, bun=2)


@pytest.fixture
def menu_item_repository() -> InMemoryMenuItemRepository:
    return InMemoryMenuItemRepository()


@pytest.fixture
def ingredient_repository(
    menu_item_repository: InMemoryMenuItemRepository,
) -> InMemoryIngredientRepository:
    return InMemoryIngredientRepository(menu_item_repository)


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest_asyncio.fixture
async def burger_inventory(
    make_ingredient: Callable[..., Ingredient],
    burger: MenuItem,
    menu_item_repository: InMemoryMenuItemRepository,
    ingredient_repository: InMemoryIngredientRepository,
) -> InMemoryIngredientRepository:
    """
    Burger recipe with patty stock 4 and bun stock 10.

    Patty: min 1, reorder 2. Bun: min 2, reorder 3.
    """
    await menu_item_repository.add(burger)
    await ingredient_repository.add(
        make_ingredient("patty", "Patty", current_stock=4, min_stock=1, reorder_point=2)
    )
    await ingredient_repository.add(
        make_ingredient(
            "bun", "Bun", current_stock=10, min_stock=2, reorder_point=3, cost_per_unit=0.3
        )
    )
    return ingredient_repository
