"""In-memory menu item repository implementation."""

from copy import deepcopy
from typing import Dict, Optional

from domain.inventory.core.entities import MenuItem


class InMemoryMenuItemRepository:
    """
    In-memory implementation of IMenuItemRepository port.

    Example:
        >>> repository = InMemoryMenuItemRepository()
        >>> await repository.add(MenuItem.create("burger", "Burger", references))
        >>> (await repository.find_by_id("burger")).name
        'Burger'
    """

    def __init__(self) -> None:
        self._storage: Dict[str, MenuItem] = {}

    async def add(self, menu_item: MenuItem) -> None:
        self._storage[menu_item.id] = deepcopy(menu_item)

    async def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        menu_item = self._storage.get(menu_item_id)
        return deepcopy(menu_item) if menu_item is not None else None

    def clear(self) -> None:
        """Clear all menu items (useful for testing)."""
        self._storage.clear()

    def count(self) -> int:
        return len(self._storage)
