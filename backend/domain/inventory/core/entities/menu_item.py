"""MenuItem entity - a dish and its recipe."""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..value_objects import IngredientId, IngredientReference


@dataclass(frozen=True)
class MenuItem:
    """
    Menu item with the recipe needed to produce one portion.

    Example:
        MenuItem "Burger"
        ├─ IngredientReference(patty, 1, "pcs")
        └─ IngredientReference(bun, 2, "pcs")

    Read-only after construction: references are stored as a tuple and
    ``get_required_ingredients`` hands out a copy.
    """

    id: str
    name: str
    ingredient_references: Tuple[IngredientReference, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence at construction, store immutably
        object.__setattr__(self, "ingredient_references", tuple(self.ingredient_references))

    @classmethod
    def create(
        cls, id: str, name: str, references: Sequence[IngredientReference]
    ) -> "MenuItem":
        """Build a menu item from a sequence of recipe lines."""
        return cls(id=id, name=name, ingredient_references=tuple(references))

    def get_required_ingredients(self) -> List[IngredientReference]:
        """Defensive copy of the recipe lines."""
        return list(self.ingredient_references)

    def calculate_required_quantity(
        self, reference: IngredientReference, multiplier: float
    ) -> float:
        """Amount of ``reference`` needed for ``multiplier`` portions."""
        return reference.required_for(multiplier)

    def ingredient_ids(self) -> List[IngredientId]:
        """Distinct ingredient ids referenced by the recipe, in recipe order."""
        seen: List[IngredientId] = []
        for reference in self.ingredient_references:
            if reference.ingredient_id not in seen:
                seen.append(reference.ingredient_id)
        return seen
