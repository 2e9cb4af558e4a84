"""Order manager - order submission orchestrator.

Validates an order, persists it and deducts its ingredients under an
explicit fulfillment policy:

ALL_OR_NOTHING:
    Validating → CheckingAvailability → Persisting → Deducting → Completed
BEST_EFFORT:
    Validating → Persisting → Deducting (line by line) → Completed

Any step can end in Failed. Only Deducting can end in CriticalFailed: the
order is already persisted, so the failure is logged for manual
reconciliation and never retried here.
"""

from typing import List, Optional, Sequence
import logging

from application.inventory.services.ingredient_deduction_service import (
    IngredientDeductionService,
)
from application.inventory.services.low_stock_notifier import LowStockNotifier
from application.ordering.orchestrators.inventory_manager import (
    InventoryManager,
    OrderLine,
)
from domain.inventory.core.entities import IngredientImpact
from domain.ordering.core.entities import (
    FailedOrderItem,
    FulfillmentPolicy,
    OrderItemDTO,
    OrderSubmissionDTO,
    OrderSubmissionResult,
    OrderSubmissionState,
    OrderType,
    build_order_payload,
)
from domain.ordering.core.ports import IOrderRepository
from domain.shared.errors import CriticalInconsistencyError, ValidationError
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)

CRITICAL_MESSAGE = "Order {order_id} created but inventory update failed"


class OrderManager:
    """
    Orchestrate order submission and ingredient deduction.

    Example:
        >>> manager = OrderManager(
        ...     order_repository,
        ...     deduction_service,
        ...     inventory_manager=inventory_manager,
        ...     policy=FulfillmentPolicy.ALL_OR_NOTHING,
        ... )
        >>> result = await manager.submit_order(order)
        >>> if not result.ok and result.kind == "critical_inconsistency":
        ...     print("Order was placed, but please verify inventory manually")
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        deduction_service: IngredientDeductionService,
        inventory_manager: Optional[InventoryManager] = None,
        low_stock_notifier: Optional[LowStockNotifier] = None,
        policy: FulfillmentPolicy = FulfillmentPolicy.ALL_OR_NOTHING,
    ):
        """
        Initialize manager.

        Args:
            order_repository: Order persistence port
            deduction_service: Batched availability/deduction service
            inventory_manager: Line-by-line processor (required for BEST_EFFORT)
            low_stock_notifier: Optional alerting after an all-or-nothing deduction
            policy: Default fulfillment policy
        """
        self._orders = order_repository
        self._deduction = deduction_service
        self._inventory = inventory_manager
        self._notifier = low_stock_notifier
        self._policy = policy

    @property
    def policy(self) -> FulfillmentPolicy:
        return self._policy

    async def validate_order(self, order: OrderSubmissionDTO) -> Result[bool]:
        """
        Validate order shape and ranges.

        Returns:
            Ok(True) or Err(ValidationError) naming the offending item
        """
        if not order.items:
            return Err(ValidationError("Order must contain at least one item"))

        if not order.table_number or order.table_number < 1:
            return Err(ValidationError("Valid table number is required"))

        if not order.customer_name or not order.customer_name.strip():
            return Err(ValidationError("Customer name is required"))

        try:
            OrderType(order.order_type)
        except ValueError:
            return Err(ValidationError(f"Invalid order type {order.order_type!r}"))

        for item in order.items:
            if item.quantity < 1:
                return Err(ValidationError(f"Invalid quantity for {item.menu_item_name}"))
            if item.price < 0:
                return Err(ValidationError(f"Invalid price for {item.menu_item_name}"))

        return Ok(True)

    @staticmethod
    def calculate_total(items: Sequence[OrderItemDTO]) -> float:
        """Sum of price × quantity over the order lines."""
        return sum(item.line_total for item in items)

    async def submit_order(
        self,
        order: OrderSubmissionDTO,
        policy: Optional[FulfillmentPolicy] = None,
    ) -> Result[OrderSubmissionResult]:
        """
        Submit an order and deduct its ingredients.

        Args:
            order: Order to submit
            policy: Overrides the manager's default policy for this call

        Returns:
            Ok(OrderSubmissionResult), Err(ValidationError |
            InsufficientStockError | PersistenceError) before the order is
            persisted, or Err(CriticalInconsistencyError) after
        """
        policy = policy or self._policy
        self._transition(OrderSubmissionState.VALIDATING, policy)

        validation = await self.validate_order(order)
        if not validation.ok:
            return self._fail(validation, policy)

        if policy is FulfillmentPolicy.BEST_EFFORT and self._inventory is None:
            return self._fail(
                Err(ValidationError("Best-effort fulfillment requires an inventory manager")),
                policy,
            )

        if policy is FulfillmentPolicy.ALL_OR_NOTHING:
            self._transition(OrderSubmissionState.CHECKING_AVAILABILITY, policy)
            availability = await self._deduction.check_availability(order.items)
            if not availability.ok:
                return self._fail(availability, policy)

        self._transition(OrderSubmissionState.PERSISTING, policy)
        try:
            receipt = await self._orders.submit_order(
                build_order_payload(order, self.calculate_total(order.items))
            )
        except Exception as e:
            receipt = to_err(e, "Failed to submit order")
        if not receipt.ok:
            return self._fail(receipt, policy)

        order_id = receipt.value.order_id
        self._transition(OrderSubmissionState.DEDUCTING, policy, order_id=order_id)

        if policy is FulfillmentPolicy.BEST_EFFORT:
            return await self._deduct_best_effort(order, order_id)
        return await self._deduct_all_or_nothing(order, order_id)

    async def preview_ingredient_impact(
        self, items: Sequence[OrderItemDTO]
    ) -> Result[List[IngredientImpact]]:
        """Ingredient impact of ``items`` without persisting or deducting."""
        return await self._deduction.preview_impact(items)

    async def _deduct_all_or_nothing(
        self, order: OrderSubmissionDTO, order_id: str
    ) -> Result[OrderSubmissionResult]:
        deduction = await self._deduction.deduct_ingredients(order.items)
        if not deduction.ok:
            return self._critical(order_id, deduction.error.message, FulfillmentPolicy.ALL_OR_NOTHING)

        impacts = deduction.value
        if self._notifier is not None:
            reorder = [impact for impact in impacts if impact.needs_reorder]
            if reorder:
                self._notifier.schedule_low_stock(reorder)

        return self._complete(order_id, impacts, FulfillmentPolicy.ALL_OR_NOTHING)

    async def _deduct_best_effort(
        self, order: OrderSubmissionDTO, order_id: str
    ) -> Result[OrderSubmissionResult]:
        assert self._inventory is not None
        outcome = await self._inventory.process_order(
            [OrderLine(item.menu_item_id, item.quantity) for item in order.items]
        )

        if len(outcome.failed_items) == len(order.items):
            causes = "; ".join(f.error for f in outcome.failed_items)
            return self._critical(order_id, causes, FulfillmentPolicy.BEST_EFFORT)

        if outcome.failed_items:
            logger.warning(
                "Order partially fulfilled",
                extra={
                    "order_id": order_id,
                    "failed_items": [f.menu_item_id for f in outcome.failed_items],
                },
            )

        impacts = [
            IngredientImpact(
                ingredient_id=r.ingredient_id,
                ingredient_name=r.ingredient_name or r.ingredient_id,
                consumed_quantity=r.consumed_quantity,
                remaining_stock=r.remaining_stock,
                unit=r.unit,
                is_low_stock=r.is_low_stock,
                needs_reorder=r.needs_reorder,
            )
            for r in outcome.consumed_ingredients
        ]
        return self._complete(
            order_id, impacts, FulfillmentPolicy.BEST_EFFORT, outcome.failed_items
        )

    def _complete(
        self,
        order_id: str,
        impacts: List[IngredientImpact],
        policy: FulfillmentPolicy,
        failed_items: Optional[List[FailedOrderItem]] = None,
    ) -> Ok[OrderSubmissionResult]:
        warnings = [impact.warning() for impact in impacts if impact.needs_reorder]
        self._transition(OrderSubmissionState.COMPLETED, policy, order_id=order_id)
        return Ok(
            OrderSubmissionResult(
                order_id=order_id,
                ingredient_impacts=impacts,
                low_stock_warnings=warnings,
                policy=policy,
                failed_items=list(failed_items or []),
            )
        )

    def _fail(self, result: Err, policy: FulfillmentPolicy) -> Err:
        logger.info(
            "Order submission failed",
            extra={
                "state": OrderSubmissionState.FAILED.value,
                "policy": policy.value,
                "kind": result.kind,
                "error": result.message,
            },
        )
        return result

    def _critical(self, order_id: str, cause: str, policy: FulfillmentPolicy) -> Err:
        logger.critical(
            "Critical: Order created but ingredient deduction failed",
            extra={
                "state": OrderSubmissionState.CRITICAL_FAILED.value,
                "policy": policy.value,
                "order_id": order_id,
                "error": cause,
            },
        )
        return Err(
            CriticalInconsistencyError(
                CRITICAL_MESSAGE.format(order_id=order_id), order_id=order_id, cause=cause
            )
        )

    @staticmethod
    def _transition(
        state: OrderSubmissionState, policy: FulfillmentPolicy, order_id: Optional[str] = None
    ) -> None:
        logger.debug(
            "Order submission state",
            extra={"state": state.value, "policy": policy.value, "order_id": order_id},
        )
