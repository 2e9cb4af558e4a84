"""MongoDB persistence implementations (motor)."""

from infrastructure.persistence.mongodb.base import MongoBaseRepository, create_mongo_client
from infrastructure.persistence.mongodb.ingredient_repository import MongoIngredientRepository
from infrastructure.persistence.mongodb.menu_item_repository import MongoMenuItemRepository
from infrastructure.persistence.mongodb.order_repository import MongoOrderRepository

__all__ = [
    "MongoBaseRepository",
    "MongoIngredientRepository",
    "MongoMenuItemRepository",
    "MongoOrderRepository",
    "create_mongo_client",
]
