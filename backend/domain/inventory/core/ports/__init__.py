"""Inventory ports (interfaces implemented by infrastructure)."""

from .ingredient_repository import IIngredientRepository
from .menu_item_repository import IMenuItemRepository
from .notification_service import INotificationService

__all__ = [
    "IIngredientRepository",
    "IMenuItemRepository",
    "INotificationService",
]
