"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.ingredient_repository import (
    InMemoryIngredientRepository,
)
from infrastructure.persistence.in_memory.menu_item_repository import (
    InMemoryMenuItemRepository,
)
from infrastructure.persistence.in_memory.order_repository import (
    InMemoryOrderRepository,
)

__all__ = [
    "InMemoryIngredientRepository",
    "InMemoryMenuItemRepository",
    "InMemoryOrderRepository",
]
