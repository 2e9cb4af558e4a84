"""IngredientReference value object.

Amount of one ingredient required to produce a single unit of a menu item.
"""

from dataclasses import dataclass

from .ingredient_id import IngredientId


@dataclass(frozen=True)
class IngredientReference:
    """Recipe line: ingredient id, quantity per portion and unit.

    ``quantity`` is deliberately not validated here; the consumption use
    case multiplies it by the ordered portions and checks the product
    against live stock.
    """

    ingredient_id: IngredientId
    quantity: float
    unit: str

    def required_for(self, portions: float) -> float:
        """Total amount needed for ``portions`` units of the menu item."""
        return self.quantity * portions
