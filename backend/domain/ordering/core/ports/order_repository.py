"""Order repository port (interface)."""

from typing import Any, Dict, Optional, Protocol

from domain.shared.result import Result

from ..entities import OrderReceipt


class IOrderRepository(Protocol):
    """
    Interface for order persistence.

    Example usage (application layer):
        >>> result = await repository.submit_order(payload)
        >>> if result.ok:
        ...     print(result.value.order_id)
    """

    async def submit_order(self, payload: Dict[str, Any]) -> Result[OrderReceipt]:
        """
        Persist a confirmed order.

        Args:
            payload: Order document built by ``build_order_payload``

        Returns:
            Ok(OrderReceipt) with the generated order id,
            Err(PersistenceError) on storage failure
        """
        ...

    async def get_by_id(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Stored order document, or None."""
        ...
