"""Order DTOs exchanged between the UI, the orchestrator and persistence."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from domain.inventory.core.entities import IngredientImpact
from domain.inventory.core.entities.records import DeductionRequest

from .policy import FulfillmentPolicy


class OrderType(str, Enum):
    """How the order is served."""

    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"


@dataclass(frozen=True)
class OrderItemDTO:
    """
    One order line.

    Not validated on construction: ``OrderManager.validate_order`` reports
    bad quantities/prices as a Result so the UI can name the offending item.
    """

    menu_item_id: str
    menu_item_name: str
    quantity: int
    price: float
    special_instructions: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_deduction_request(self) -> DeductionRequest:
        return DeductionRequest(menu_item_id=self.menu_item_id, quantity=self.quantity)


@dataclass(frozen=True)
class OrderSubmissionDTO:
    """Order as submitted by the waiter/customer UI."""

    items: List[OrderItemDTO]
    table_number: int
    customer_name: str
    order_type: OrderType = OrderType.DINE_IN
    notes: Optional[str] = None


@dataclass(frozen=True)
class OrderReceipt:
    """Persistence acknowledgement of a stored order."""

    order_id: str


@dataclass(frozen=True)
class FailedOrderItem:
    """Order line that could not be fulfilled under the best-effort policy."""

    menu_item_id: str
    error: str
    kind: str = "domain_error"


@dataclass(frozen=True)
class OrderSubmissionResult:
    """Outcome of a successful ``submit_order``."""

    order_id: str
    ingredient_impacts: List[IngredientImpact]
    low_stock_warnings: List[str]
    policy: FulfillmentPolicy = FulfillmentPolicy.ALL_OR_NOTHING
    failed_items: List[FailedOrderItem] = field(default_factory=list)

    @property
    def partially_fulfilled(self) -> bool:
        return bool(self.failed_items)


def build_order_payload(order: OrderSubmissionDTO, total_amount: float) -> Dict[str, Any]:
    """
    Build the document handed to ``IOrderRepository.submit_order``.

    Args:
        order: Validated submission
        total_amount: Pre-computed order total

    Returns:
        Plain dict payload (status is always "confirmed")
    """
    return {
        "items": [
            {
                "menu_item": item.menu_item_id,
                "menu_item_name": item.menu_item_name,
                "quantity": item.quantity,
                "price": item.price,
                "special_instructions": item.special_instructions or "",
            }
            for item in order.items
        ],
        "total_amount": total_amount,
        "table_number": order.table_number,
        "customer_name": order.customer_name,
        "order_type": OrderType(order.order_type).value,
        "notes": order.notes,
        "status": "confirmed",
    }
