"""Inventory manager - best-effort, line-by-line order consumption.

Consumes each order line independently. A failing line is recorded and
processing continues; lines already consumed are NOT rolled back, so a
partially fulfilled order is a possible outcome.
"""

from dataclasses import dataclass, field
from typing import List, Sequence
import logging

from application.inventory.commands.consume_ingredients import (
    ConsumeIngredientsCommand,
    ConsumeIngredientsCommandHandler,
)
from application.inventory.services.low_stock_notifier import LowStockNotifier
from domain.inventory.core.entities import ConsumptionResult
from domain.ordering.core.entities import FailedOrderItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderLine:
    """Menu item and portions to consume."""

    menu_item_id: str
    quantity: int


@dataclass(frozen=True)
class ProcessOrderResult:
    """
    Outcome of ``InventoryManager.process_order``.

    Attributes:
        successful: True only if no line failed
        consumed_ingredients: Results of every line that succeeded
        failed_items: Lines that could not be consumed
    """

    successful: bool
    consumed_ingredients: List[ConsumptionResult] = field(default_factory=list)
    failed_items: List[FailedOrderItem] = field(default_factory=list)


class InventoryManager:
    """
    Sequential consumption of order lines with low-stock notification.

    Flow per line:
    1. Run the consumption use case
    2. On success: collect results, notify for lines needing reorder
    3. On failure: record FailedOrderItem and continue

    Example:
        >>> manager = InventoryManager(consume_handler, notifier)
        >>> outcome = await manager.process_order([OrderLine("burger", 2)])
        >>> outcome.successful
        True
    """

    def __init__(
        self,
        consume_ingredients: ConsumeIngredientsCommandHandler,
        low_stock_notifier: LowStockNotifier,
    ):
        """
        Initialize manager.

        Args:
            consume_ingredients: Consumption use case
            low_stock_notifier: Notifier for reorder alerts
        """
        self._consume = consume_ingredients
        self._notifier = low_stock_notifier

    async def process_order(self, order_items: Sequence[OrderLine]) -> ProcessOrderResult:
        """
        Consume every line, continuing past failures.

        Args:
            order_items: Lines to consume, processed in order

        Returns:
            ProcessOrderResult with consumed ingredients and failed lines
        """
        consumed: List[ConsumptionResult] = []
        failed: List[FailedOrderItem] = []

        for item in order_items:
            outcome = await self._consume.execute(
                ConsumeIngredientsCommand(menu_item_id=item.menu_item_id, quantity=item.quantity)
            )

            if not outcome.ok:
                failed.append(
                    FailedOrderItem(
                        menu_item_id=item.menu_item_id,
                        error=outcome.error.message,
                        kind=outcome.error.kind,
                    )
                )
                logger.warning(
                    "Order line not consumed",
                    extra={
                        "menu_item_id": item.menu_item_id,
                        "quantity": item.quantity,
                        "kind": outcome.error.kind,
                        "error": outcome.error.message,
                    },
                )
                continue

            consumed.extend(outcome.value)

            reorder = [r for r in outcome.value if r.needs_reorder]
            if reorder:
                # Sent in the background; delivery failures are logged by the notifier
                self._notifier.schedule_low_stock(reorder)

        logger.info(
            "Order processed",
            extra={
                "line_count": len(order_items),
                "failed_count": len(failed),
                "ingredient_count": len(consumed),
            },
        )

        return ProcessOrderResult(
            successful=not failed,
            consumed_ingredients=consumed,
            failed_items=failed,
        )
