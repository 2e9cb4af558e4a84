"""Unit tests for MenuItem entity."""

from typing import Callable

from domain.inventory.core.entities import MenuItem
from domain.inventory.core.value_objects import IngredientId


class TestMenuItem:
    """Test MenuItem recipe accessors."""

    def test_required_ingredients_is_a_copy(self, burger: MenuItem) -> None:
        references = burger.get_required_ingredients()
        references.clear()
        assert len(burger.get_required_ingredients()) == 2

    def test_references_stored_as_tuple(self, burger: MenuItem) -> None:
        assert isinstance(burger.ingredient_references, tuple)

    def test_calculate_required_quantity(self, burger: MenuItem) -> None:
        bun = burger.get_required_ingredients()[1]
        assert burger.calculate_required_quantity(bun, 4) == 8

    def test_ingredient_ids_distinct_in_order(
        self, make_menu_item: Callable[..., MenuItem]
    ) -> None:
        item = MenuItem.create(
            "double",
            "Double Burger",
            make_menu_item("x", "x", patty=1, bun=2).get_required_ingredients()
            + make_menu_item("y", "y", patty=1).get_required_ingredients(),
        )
        assert item.ingredient_ids() == [IngredientId("patty"), IngredientId("bun")]
