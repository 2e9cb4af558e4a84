"""Unit tests for InMemoryIngredientRepository.

Tests focus on:
- Lookup and copy semantics
- Version-checked batch saves
- Batched availability, deduction and preview
"""

import asyncio
from typing import Callable

import pytest

from domain.inventory.core.entities import DeductionRequest, Ingredient, MenuItem
from domain.inventory.core.value_objects import IngredientId
from infrastructure.persistence.in_memory import (
    InMemoryIngredientRepository,
    InMemoryMenuItemRepository,
)


class TestLookup:
    """Test find methods."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, burger_inventory: InMemoryIngredientRepository) -> None:
        bun = await burger_inventory.find_by_id(IngredientId("bun"))
        assert bun is not None
        assert bun.name == "Bun"
        assert await burger_inventory.find_by_id(IngredientId("ghost")) is None

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_missing_and_duplicates(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        found = await burger_inventory.find_by_ids(
            [IngredientId("bun"), IngredientId("ghost"), IngredientId("bun")]
        )
        assert [str(i.id) for i in found] == ["bun"]

    @pytest.mark.asyncio
    async def test_clear_and_count(self, burger_inventory: InMemoryIngredientRepository) -> None:
        assert burger_inventory.count() == 2
        burger_inventory.clear()
        assert burger_inventory.count() == 0


class TestSaveAll:
    """Test optimistic concurrency on save_all."""

    @pytest.mark.asyncio
    async def test_save_bumps_version(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        bun = await burger_inventory.find_by_id(IngredientId("bun"))
        assert bun is not None

        result = await burger_inventory.save_all([bun.consume(1)])

        assert result.ok
        stored = await burger_inventory.find_by_id(IngredientId("bun"))
        assert stored is not None
        assert stored.version == bun.version + 1
        assert stored.get_stock() == 9

    @pytest.mark.asyncio
    async def test_stale_write_rejected_and_nothing_written(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        bun = await burger_inventory.find_by_id(IngredientId("bun"))
        patty = await burger_inventory.find_by_id(IngredientId("patty"))
        assert bun is not None and patty is not None
        await burger_inventory.save_all([bun.consume(1)])

        # Second writer still holds the old bun version
        result = await burger_inventory.save_all([patty.consume(1), bun.consume(2)])

        assert result.kind == "concurrency_conflict"
        assert (await burger_inventory.get_stock_level(IngredientId("patty"))).value == 4
        assert (await burger_inventory.get_stock_level(IngredientId("bun"))).value == 9

    @pytest.mark.asyncio
    async def test_concurrent_writers_one_wins(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        bun = await burger_inventory.find_by_id(IngredientId("bun"))
        assert bun is not None

        results = await asyncio.gather(
            burger_inventory.save_all([bun.consume(6)]),
            burger_inventory.save_all([bun.consume(6)]),
        )

        assert sorted(r.ok for r in results) == [False, True]
        assert (await burger_inventory.get_stock_level(IngredientId("bun"))).value == 4


class TestBatchedEndpoints:
    """Test check_availability, deduct_ingredients and preview_deduction."""

    @pytest.mark.asyncio
    async def test_check_availability(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.check_availability(["burger"], [4])
        (availability,) = result.value
        assert availability.available
        assert availability.menu_item_name == "Burger"

    @pytest.mark.asyncio
    async def test_check_availability_names_missing_ingredients(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.check_availability(["burger"], [5])
        (availability,) = result.value
        assert not availability.available
        assert availability.missing_ingredients == ["Patty"]

    @pytest.mark.asyncio
    async def test_check_availability_is_cumulative(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.check_availability(["burger", "burger"], [2, 3])
        assert [a.available for a in result.value] == [True, False]

    @pytest.mark.asyncio
    async def test_check_availability_matches_ingredients_by_id(
        self,
        ingredient_repository: InMemoryIngredientRepository,
        menu_item_repository: InMemoryMenuItemRepository,
        make_ingredient: Callable[..., Ingredient],
        make_menu_item: Callable[..., MenuItem],
    ) -> None:
        await ingredient_repository.add(
            make_ingredient("cheddar", "Cheese", current_stock=1, reorder_point=5)
        )
        await ingredient_repository.add(make_ingredient("mozzarella", "Cheese", current_stock=100))
        await menu_item_repository.add(make_menu_item("burger", "Burger", cheddar=2))
        await menu_item_repository.add(make_menu_item("pizza", "Pizza", mozzarella=10))

        result = await ingredient_repository.check_availability(["burger", "pizza"], [1, 1])

        burger, pizza = result.value
        assert not burger.available
        assert burger.missing_ingredients == ["Cheese"]
        assert pizza.available
        assert pizza.missing_ingredients == []

    @pytest.mark.asyncio
    async def test_check_availability_length_mismatch(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.check_availability(["burger"], [1, 2])
        assert result.kind == "validation"

    @pytest.mark.asyncio
    async def test_check_availability_unknown_menu_item(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.check_availability(["ghost"], [1])
        assert result.kind == "not_found"

    @pytest.mark.asyncio
    async def test_deduct_sums_across_requests(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.deduct_ingredients(
            [DeductionRequest("burger", 1), DeductionRequest("burger", 3)]
        )

        by_id = {r.ingredient_id: r for r in result.value}
        assert by_id["bun"].consumed_quantity == 8
        assert by_id["bun"].remaining_stock == 2
        assert by_id["bun"].reorder_point == 3
        assert (await burger_inventory.get_stock_level(IngredientId("patty"))).value == 0

    @pytest.mark.asyncio
    async def test_deduct_is_all_or_nothing(
        self,
        burger_inventory: InMemoryIngredientRepository,
        make_menu_item: Callable[..., MenuItem],
        menu_item_repository: InMemoryMenuItemRepository,
        make_ingredient: Callable[..., Ingredient],
    ) -> None:
        await menu_item_repository.add(make_menu_item("fries", "Fries", potato=3))
        await burger_inventory.add(make_ingredient("potato", "Potato", current_stock=2))

        result = await burger_inventory.deduct_ingredients(
            [DeductionRequest("burger", 1), DeductionRequest("fries", 1)]
        )

        assert result.kind == "insufficient_stock"
        assert (await burger_inventory.get_stock_level(IngredientId("bun"))).value == 10

    @pytest.mark.asyncio
    async def test_deduct_rejects_non_positive_quantity(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        result = await burger_inventory.deduct_ingredients([DeductionRequest("burger", 0)])
        assert result.kind == "validation"

    @pytest.mark.asyncio
    async def test_preview_matches_deduct_without_writing(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        requests = [DeductionRequest("burger", 2)]

        preview = await burger_inventory.preview_deduction(requests)
        assert (await burger_inventory.get_stock_level(IngredientId("bun"))).value == 10

        deducted = await burger_inventory.deduct_ingredients(requests)
        assert preview.value == deducted.value

    @pytest.mark.asyncio
    async def test_low_stock_alerts(
        self, burger_inventory: InMemoryIngredientRepository
    ) -> None:
        assert (await burger_inventory.get_low_stock_alerts()).value == []

        await burger_inventory.deduct_ingredients([DeductionRequest("burger", 4)])

        alerts = (await burger_inventory.get_low_stock_alerts()).value
        assert {a.ingredient_id for a in alerts} == {"patty", "bun"}
        assert all(a.consumed_quantity == 0 for a in alerts)

    @pytest.mark.asyncio
    async def test_stock_level_unknown(
        self, ingredient_repository: InMemoryIngredientRepository
    ) -> None:
        result = await ingredient_repository.get_stock_level(IngredientId("ghost"))
        assert result.kind == "not_found"
