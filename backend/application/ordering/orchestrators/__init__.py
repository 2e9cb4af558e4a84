"""Ordering orchestrators."""

from .inventory_manager import InventoryManager, OrderLine, ProcessOrderResult
from .order_manager import OrderManager

__all__ = [
    "InventoryManager",
    "OrderLine",
    "OrderManager",
    "ProcessOrderResult",
]
