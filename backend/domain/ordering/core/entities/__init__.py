"""Ordering entities and DTOs."""

from .order import (
    FailedOrderItem,
    OrderItemDTO,
    OrderReceipt,
    OrderSubmissionDTO,
    OrderSubmissionResult,
    OrderType,
    build_order_payload,
)
from .policy import FulfillmentPolicy, OrderSubmissionState

__all__ = [
    "FailedOrderItem",
    "FulfillmentPolicy",
    "OrderItemDTO",
    "OrderReceipt",
    "OrderSubmissionDTO",
    "OrderSubmissionResult",
    "OrderSubmissionState",
    "OrderType",
    "build_order_payload",
]
