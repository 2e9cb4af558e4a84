"""MongoDB implementation of order repository."""

from typing import Any, Dict, Optional
from uuid import uuid4

from domain.ordering.core.entities import OrderReceipt
from domain.shared.result import Ok, Result, to_err
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoOrderRepository(MongoBaseRepository[Dict[str, Any]]):
    """
    MongoDB implementation of order repository.

    Orders are stored as the payload built by ``build_order_payload`` plus
    ``_id`` (UUID string) and ``created_at`` (ISO 8601, UTC).
    """

    @property
    def collection_name(self) -> str:
        return "orders"

    def to_document(self, entity: Dict[str, Any]) -> Dict[str, Any]:
        return dict(entity)

    def from_document(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        order = dict(doc)
        order["id"] = order.pop("_id")
        return order

    async def submit_order(self, payload: Dict[str, Any]) -> Result[OrderReceipt]:
        order_id = str(uuid4())
        document = self.to_document(payload)
        document["_id"] = order_id
        document["created_at"] = self.now_iso()
        try:
            await self._insert_one(document)
        except Exception as e:
            return to_err(e, "Failed to submit order")
        return Ok(OrderReceipt(order_id=order_id))

    async def get_by_id(self, order_id: str) -> Optional[Dict[str, Any]]:
        doc = await self._find_one({"_id": order_id})
        return self.from_document(doc) if doc is not None else None
