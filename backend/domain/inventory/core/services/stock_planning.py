"""Stock planning - pure two-phase consumption logic.

Shared by the consumption use case and the repositories' batched
endpoints so every path validates a whole batch before mutating any
ingredient.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from domain.shared.errors import InsufficientStockError, NotFoundError, ValidationError

from ..entities import Ingredient, IngredientAvailability, MenuItem
from ..value_objects import IngredientId


def aggregate_requirements(lines: Iterable[Tuple[MenuItem, float]]) -> Dict[IngredientId, float]:
    """
    Total amount per distinct ingredient over ``(menu_item, portions)`` lines.

    Repeated recipe lines and repeated menu items are summed; insertion
    order follows first appearance.

    Example:
        >>> aggregate_requirements([(burger, 2)])
        {IngredientId('patty'): 2.0, IngredientId('bun'): 4.0}
    """
    required: Dict[IngredientId, float] = {}
    for menu_item, portions in lines:
        for reference in menu_item.get_required_ingredients():
            amount = menu_item.calculate_required_quantity(reference, portions)
            if amount < 0:
                raise ValidationError(
                    f"Recipe for {menu_item.name} requires a negative amount of "
                    f"{reference.ingredient_id}"
                )
            required[reference.ingredient_id] = required.get(reference.ingredient_id, 0.0) + amount
    return required


def validate_requirements(
    required: Mapping[IngredientId, float],
    ingredients: Mapping[IngredientId, Ingredient],
) -> None:
    """
    Phase 1: check every requirement against stock without mutating anything.

    Raises:
        NotFoundError: A required ingredient does not exist
        InsufficientStockError: First ingredient whose stock is too low
    """
    for ingredient_id, amount in required.items():
        ingredient = ingredients.get(ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient {ingredient_id} not found")
        if amount > ingredient.get_stock():
            raise InsufficientStockError.for_ingredient(
                ingredient.name, ingredient.get_stock(), amount, ingredient.get_unit()
            )


def apply_requirements(
    required: Mapping[IngredientId, float],
    ingredients: Mapping[IngredientId, Ingredient],
) -> List[Ingredient]:
    """
    Validate then consume: returns the updated aggregates in requirement order.

    Nothing is returned (and no aggregate is produced) unless the whole
    batch validates.
    """
    validate_requirements(required, ingredients)
    return [ingredients[ingredient_id].consume(amount) for ingredient_id, amount in required.items()]


def shortfalls(
    required: Mapping[IngredientId, float],
    ingredients: Mapping[IngredientId, Ingredient],
) -> List[IngredientId]:
    """Ids of ingredients that are unknown or cannot cover ``required``."""
    return [
        ingredient_id
        for ingredient_id, amount in required.items()
        if ingredient_id not in ingredients or amount > ingredients[ingredient_id].get_stock()
    ]


def display_names(
    ingredient_ids: Iterable[IngredientId],
    ingredients: Mapping[IngredientId, Ingredient],
) -> List[str]:
    """Ingredient names for display; the id stands in for unknown ingredients."""
    return [
        ingredients[i].name if i in ingredients else str(i)
        for i in ingredient_ids
    ]


def line_availability(
    lines: Sequence[Tuple[MenuItem, float]],
    ingredients: Mapping[IngredientId, Ingredient],
) -> List[IngredientAvailability]:
    """
    Cumulative availability of order lines.

    Each line is checked against the stock left after all previous lines.
    A line only reports shortfalls of ingredients in its own recipe,
    matched by id.
    """
    availability: List[IngredientAvailability] = []
    for position, (menu_item, _) in enumerate(lines):
        own = set(menu_item.ingredient_ids())
        missing = [
            i for i in shortfalls(aggregate_requirements(lines[: position + 1]), ingredients)
            if i in own
        ]
        availability.append(
            IngredientAvailability(
                menu_item_id=menu_item.id,
                menu_item_name=menu_item.name,
                available=not missing,
                missing_ingredients=display_names(missing, ingredients),
            )
        )
    return availability


def index_by_id(ingredients: Iterable[Ingredient]) -> Dict[IngredientId, Ingredient]:
    return {ingredient.id: ingredient for ingredient in ingredients}
