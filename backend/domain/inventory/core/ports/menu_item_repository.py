"""Menu item repository port (interface)."""

from typing import Optional, Protocol

from ..entities import MenuItem


class IMenuItemRepository(Protocol):
    """
    Interface for menu item (recipe) lookup.

    Example usage (application layer):
        >>> menu_item = await repository.find_by_id("burger")
        >>> if menu_item is None:
        ...     raise NotFoundError("Menu item burger not found")
    """

    async def add(self, menu_item: MenuItem) -> None:
        """Insert or overwrite a menu item."""
        ...

    async def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        """
        Retrieve menu item by ID.

        Returns:
            MenuItem if found, None otherwise

        Raises:
            PersistenceError: On storage failure
        """
        ...
