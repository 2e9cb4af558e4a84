"""MongoDB implementation of menu item repository."""

from typing import Any, Dict, Optional

from domain.inventory.core.entities import MenuItem
from domain.inventory.core.value_objects import IngredientId, IngredientReference
from domain.shared.errors import PersistenceError, ValidationError
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoMenuItemRepository(MongoBaseRepository[MenuItem]):
    """
    MongoDB implementation of menu item repository.

    Document Schema:
    {
        "_id": "burger",
        "name": "Burger",
        "ingredients": [
            {"ingredient_id": "patty", "quantity": 1.0, "unit": "pcs"},
            {"ingredient_id": "bun", "quantity": 2.0, "unit": "pcs"}
        ]
    }
    """

    @property
    def collection_name(self) -> str:
        return "menu_items"

    def to_document(self, entity: MenuItem) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "name": entity.name,
            "ingredients": [
                {
                    "ingredient_id": str(reference.ingredient_id),
                    "quantity": reference.quantity,
                    "unit": reference.unit,
                }
                for reference in entity.ingredient_references
            ],
        }

    def from_document(self, doc: Dict[str, Any]) -> MenuItem:
        try:
            return MenuItem.create(
                id=doc["_id"],
                name=doc["name"],
                references=[
                    IngredientReference(
                        ingredient_id=IngredientId.create(line["ingredient_id"]),
                        quantity=float(line["quantity"]),
                        unit=line["unit"],
                    )
                    for line in doc.get("ingredients", [])
                ],
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise PersistenceError(f"Invalid menu item document {doc.get('_id')}: {e}") from e

    async def add(self, menu_item: MenuItem) -> None:
        await self._replace_one(self.to_document(menu_item))

    async def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        doc = await self._find_one({"_id": menu_item_id})
        return self.from_document(doc) if doc is not None else None
