"""In-memory order repository implementation.

Stores order payloads keyed by a generated UUID. Used by tests and
local runs where no order backend is available.
"""

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from domain.ordering.core.entities import OrderReceipt
from domain.shared.result import Ok, Result


class InMemoryOrderRepository:
    """
    In-memory implementation of IOrderRepository port.

    Example:
        >>> repository = InMemoryOrderRepository()
        >>> receipt = await repository.submit_order({"items": [], "status": "confirmed"})
        >>> stored = await repository.get_by_id(receipt.value.order_id)
    """

    def __init__(self) -> None:
        self._storage: Dict[str, Dict[str, Any]] = {}

    async def submit_order(self, payload: Dict[str, Any]) -> Result[OrderReceipt]:
        """
        Store a copy of ``payload`` under a new order id.

        The stored document gets ``id`` and ``created_at`` added.
        """
        order_id = str(uuid4())
        document = deepcopy(payload)
        document["id"] = order_id
        document["created_at"] = datetime.now(timezone.utc).isoformat()
        self._storage[order_id] = document
        return Ok(OrderReceipt(order_id=order_id))

    async def get_by_id(self, order_id: str) -> Optional[Dict[str, Any]]:
        document = self._storage.get(order_id)
        return deepcopy(document) if document is not None else None

    def clear(self) -> None:
        """Clear all orders (useful for testing)."""
        self._storage.clear()

    def count(self) -> int:
        return len(self._storage)
