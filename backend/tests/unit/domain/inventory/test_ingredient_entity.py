"""Unit tests for Ingredient aggregate."""

from typing import Callable

import pytest

from domain.inventory.core.entities import Ingredient
from domain.shared.errors import InsufficientStockError, ValidationError


class TestIngredientCreation:
    """Test Ingredient.create() invariants."""

    def test_create_valid(self, make_ingredient: Callable[..., Ingredient]) -> None:
        ingredient = make_ingredient()
        assert str(ingredient.id) == "patty"
        assert ingredient.name == "Patty"
        assert ingredient.get_stock() == 10
        assert ingredient.get_unit() == "pcs"
        assert ingredient.version == 0
        assert ingredient.reorder_point >= ingredient.min_stock

    def test_blank_name(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError, match="name is required"):
            make_ingredient(name="  ")

    def test_negative_min_stock(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError, match="Min stock cannot be negative"):
            make_ingredient(min_stock=-1, reorder_point=0)

    def test_reorder_point_below_min_stock(
        self, make_ingredient: Callable[..., Ingredient]
    ) -> None:
        with pytest.raises(ValidationError, match="Reorder point"):
            make_ingredient(min_stock=5, reorder_point=4)

    def test_reorder_point_equal_to_min_stock(
        self, make_ingredient: Callable[..., Ingredient]
    ) -> None:
        ingredient = make_ingredient(min_stock=5, reorder_point=5)
        assert ingredient.reorder_point == ingredient.min_stock

    @pytest.mark.parametrize("cost", [0, -0.5])
    def test_non_positive_cost(
        self, make_ingredient: Callable[..., Ingredient], cost: float
    ) -> None:
        with pytest.raises(ValidationError, match="Cost per unit must be positive"):
            make_ingredient(cost_per_unit=cost)

    def test_negative_stock(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError):
            make_ingredient(current_stock=-1)

    def test_blank_id(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError):
            make_ingredient(id="")


class TestIngredientQueries:
    """Test threshold queries."""

    def test_is_low_stock_at_threshold(self, make_ingredient: Callable[..., Ingredient]) -> None:
        assert make_ingredient(current_stock=2, min_stock=2).is_low_stock()
        assert not make_ingredient(current_stock=3, min_stock=2).is_low_stock()

    def test_needs_reorder_at_threshold(
        self, make_ingredient: Callable[..., Ingredient]
    ) -> None:
        assert make_ingredient(current_stock=5, reorder_point=5).needs_reorder()
        assert not make_ingredient(current_stock=6, reorder_point=5).needs_reorder()

    def test_needs_reorder_before_low_stock(
        self, make_ingredient: Callable[..., Ingredient]
    ) -> None:
        """Reorder triggers at a stock level above the low-stock threshold."""
        ingredient = make_ingredient(current_stock=4, min_stock=2, reorder_point=5)
        assert ingredient.needs_reorder()
        assert not ingredient.is_low_stock()

    def test_low_stock_implies_reorder(self, make_ingredient: Callable[..., Ingredient]) -> None:
        ingredient = make_ingredient(current_stock=1, min_stock=2, reorder_point=5)
        assert ingredient.is_low_stock()
        assert ingredient.needs_reorder()

    def test_calculate_cost(self, make_ingredient: Callable[..., Ingredient]) -> None:
        assert make_ingredient(cost_per_unit=1.5).calculate_cost(4) == 6


class TestIngredientCommands:
    """Test consume/replenish."""

    @pytest.mark.parametrize("quantity", [0, 3, 10])
    def test_consume(self, make_ingredient: Callable[..., Ingredient], quantity: float) -> None:
        ingredient = make_ingredient(current_stock=10)
        consumed = ingredient.consume(quantity)
        assert consumed.get_stock() == ingredient.get_stock() - quantity
        assert ingredient.get_stock() == 10

    def test_consume_keeps_identity_thresholds_and_version(
        self, make_ingredient: Callable[..., Ingredient]
    ) -> None:
        ingredient = make_ingredient(version=7)
        consumed = ingredient.consume(1)
        assert consumed.id == ingredient.id
        assert consumed.min_stock == ingredient.min_stock
        assert consumed.reorder_point == ingredient.reorder_point
        assert consumed.version == 7

    def test_consume_more_than_stock(self, make_ingredient: Callable[..., Ingredient]) -> None:
        ingredient = make_ingredient(current_stock=3)
        with pytest.raises(InsufficientStockError) as exc_info:
            ingredient.consume(4)
        error = exc_info.value
        assert error.ingredient_name == "Patty"
        assert error.available == 3
        assert error.required == 4
        assert str(error) == "Insufficient stock for Patty. Available: 3pcs, Required: 4pcs"

    def test_consume_negative(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError):
            make_ingredient().consume(-1)

    def test_replenish(self, make_ingredient: Callable[..., Ingredient]) -> None:
        ingredient = make_ingredient(current_stock=10)
        assert ingredient.replenish(5).get_stock() == 15
        assert ingredient.replenish(0).get_stock() == 10

    def test_replenish_negative(self, make_ingredient: Callable[..., Ingredient]) -> None:
        with pytest.raises(ValidationError):
            make_ingredient().replenish(-1)
