"""Unit tests for OrderManager (order submission orchestrator)."""

import asyncio
import logging
from typing import List
from unittest.mock import AsyncMock

import pytest
from tenacity import wait_none

from application.inventory.commands import ConsumeIngredientsCommandHandler
from application.inventory.services import IngredientDeductionService, LowStockNotifier
from application.ordering.orchestrators import InventoryManager, OrderManager
from domain.inventory.core.value_objects import IngredientId
from domain.ordering.core.entities import (
    FulfillmentPolicy,
    OrderItemDTO,
    OrderReceipt,
    OrderSubmissionDTO,
)
from domain.shared.errors import CriticalInconsistencyError, PersistenceError
from domain.shared.result import Err, Ok
from infrastructure.persistence.in_memory import (
    InMemoryIngredientRepository,
    InMemoryMenuItemRepository,
    InMemoryOrderRepository,
)


def make_order(items: List[OrderItemDTO]) -> OrderSubmissionDTO:
    return OrderSubmissionDTO(items=items, table_number=3, customer_name="Ada")


@pytest.fixture
def notification_service() -> AsyncMock:
    service = AsyncMock()
    service.send_low_stock_alert.return_value = True
    return service


@pytest.fixture
def notifier(
    notification_service: AsyncMock, ingredient_repository: InMemoryIngredientRepository
) -> LowStockNotifier:
    return LowStockNotifier(notification_service, ingredient_repository)


@pytest.fixture
def manager(
    menu_item_repository: InMemoryMenuItemRepository,
    ingredient_repository: InMemoryIngredientRepository,
    order_repository: InMemoryOrderRepository,
    notifier: LowStockNotifier,
) -> OrderManager:
    """Fully wired in-memory manager (ALL_OR_NOTHING by default)."""
    consume = ConsumeIngredientsCommandHandler(
        menu_item_repository, ingredient_repository, retry_wait=wait_none()
    )
    return OrderManager(
        order_repository,
        IngredientDeductionService(ingredient_repository),
        inventory_manager=InventoryManager(consume, notifier),
        low_stock_notifier=notifier,
    )


class TestValidateOrder:
    """Test order validation."""

    @pytest.mark.asyncio
    async def test_empty_order_fails_before_any_repository_call(self) -> None:
        orders = AsyncMock()
        ingredients = AsyncMock()
        manager = OrderManager(orders, IngredientDeductionService(ingredients))

        result = await manager.submit_order(make_order([]))

        assert result.kind == "validation"
        assert result.message == "Order must contain at least one item"
        assert orders.mock_calls == []
        assert ingredients.mock_calls == []

    @pytest.mark.asyncio
    async def test_unknown_order_type_fails_before_any_repository_call(self) -> None:
        orders = AsyncMock()
        ingredients = AsyncMock()
        manager = OrderManager(orders, IngredientDeductionService(ingredients))
        order = OrderSubmissionDTO(
            [OrderItemDTO("burger", "Burger", 1, 9.5)], 3, "Ada", order_type="pickup"
        )

        result = await manager.submit_order(order)

        assert result.kind == "validation"
        assert orders.mock_calls == []
        assert ingredients.mock_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "order,message",
        [
            (
                OrderSubmissionDTO([OrderItemDTO("burger", "Burger", 1, 9.5)], 0, "Ada"),
                "Valid table number is required",
            ),
            (
                OrderSubmissionDTO([OrderItemDTO("burger", "Burger", 1, 9.5)], 1, "  "),
                "Customer name is required",
            ),
            (
                OrderSubmissionDTO(
                    [OrderItemDTO("burger", "Burger", 1, 9.5)], 1, "Ada", order_type="pickup"
                ),
                "Invalid order type 'pickup'",
            ),
            (
                OrderSubmissionDTO([OrderItemDTO("burger", "Burger", 0, 9.5)], 1, "Ada"),
                "Invalid quantity for Burger",
            ),
            (
                OrderSubmissionDTO([OrderItemDTO("burger", "Burger", 1, -1)], 1, "Ada"),
                "Invalid price for Burger",
            ),
        ],
    )
    async def test_invalid_orders(
        self, manager: OrderManager, order: OrderSubmissionDTO, message: str
    ) -> None:
        result = await manager.validate_order(order)
        assert result.kind == "validation"
        assert result.message == message

    def test_calculate_total(self) -> None:
        total = OrderManager.calculate_total(
            [OrderItemDTO("burger", "Burger", 2, 9.5), OrderItemDTO("fries", "Fries", 1, 3.0)]
        )
        assert total == 22.0


class TestAllOrNothing:
    """Test ALL_OR_NOTHING submission."""

    @pytest.mark.asyncio
    async def test_successful_submission(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
        notification_service: AsyncMock,
        notifier: LowStockNotifier,
    ) -> None:
        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 4, 9.5)])
        )

        assert result.ok
        submission = result.value
        assert submission.policy is FulfillmentPolicy.ALL_OR_NOTHING
        assert submission.failed_items == []
        impacts = {i.ingredient_id: i for i in submission.ingredient_impacts}
        assert impacts["patty"].remaining_stock == 0
        assert impacts["bun"].remaining_stock == 2
        assert "⚠️ Bun: 2 pcs remaining (reorder needed)" in submission.low_stock_warnings

        stored = await order_repository.get_by_id(submission.order_id)
        assert stored is not None
        assert stored["total_amount"] == 38.0
        assert stored["status"] == "confirmed"
        await notifier.drain()
        notification_service.send_low_stock_alert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_submission_completes_while_alert_is_pending(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        notification_service: AsyncMock,
        notifier: LowStockNotifier,
    ) -> None:
        release = asyncio.Event()

        async def send_when_released(alerts: object) -> bool:
            await release.wait()
            return True

        notification_service.send_low_stock_alert.side_effect = send_when_released

        result = await asyncio.wait_for(
            manager.submit_order(make_order([OrderItemDTO("burger", "Burger", 4, 9.5)])),
            timeout=1,
        )

        assert result.ok
        assert notifier.pending_count == 1
        release.set()
        await notifier.drain()
        assert notifier.pending_count == 0

    @pytest.mark.asyncio
    async def test_unavailable_order_is_not_persisted(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
    ) -> None:
        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 5, 9.5)])
        )

        assert result.kind == "insufficient_stock"
        assert "Burger" in result.message
        assert order_repository.count() == 0
        assert (await burger_inventory.get_stock_level(IngredientId("patty"))).value == 4

    @pytest.mark.asyncio
    async def test_lines_competing_for_stock_are_checked_together(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
    ) -> None:
        result = await manager.submit_order(
            make_order(
                [
                    OrderItemDTO("burger", "Burger", 3, 9.5),
                    OrderItemDTO("burger", "Burger", 2, 9.5),
                ]
            )
        )

        assert result.kind == "insufficient_stock"
        assert order_repository.count() == 0

    @pytest.mark.asyncio
    async def test_persistence_failure(self) -> None:
        orders = AsyncMock()
        orders.submit_order.return_value = Err(PersistenceError("Failed to submit order"))
        deduction = AsyncMock(spec=IngredientDeductionService)
        deduction.check_availability.return_value = Ok(True)
        manager = OrderManager(orders, deduction)

        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 1, 9.5)])
        )

        assert result.kind == "persistence"
        deduction.deduct_ingredients.assert_not_called()

    @pytest.mark.asyncio
    async def test_deduction_failure_after_persisting_is_critical(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        orders = AsyncMock()
        orders.submit_order.return_value = Ok(OrderReceipt(order_id="order-42"))
        deduction = AsyncMock(spec=IngredientDeductionService)
        deduction.check_availability.return_value = Ok(True)
        deduction.deduct_ingredients.return_value = Err(PersistenceError("db timeout"))
        manager = OrderManager(orders, deduction)

        with caplog.at_level(logging.CRITICAL):
            result = await manager.submit_order(
                make_order([OrderItemDTO("burger", "Burger", 1, 9.5)])
            )

        assert not result.ok
        assert isinstance(result.error, CriticalInconsistencyError)
        assert result.error.order_id == "order-42"
        assert result.error.cause == "db timeout"
        assert "order-42" in result.message
        assert "inventory update failed" in result.message
        assert deduction.deduct_ingredients.await_count == 1
        assert any(r.levelno == logging.CRITICAL for r in caplog.records)

    @pytest.mark.asyncio
    async def test_repository_exception_on_submit(self) -> None:
        orders = AsyncMock()
        orders.submit_order.side_effect = ConnectionError("refused")
        deduction = AsyncMock(spec=IngredientDeductionService)
        deduction.check_availability.return_value = Ok(True)
        manager = OrderManager(orders, deduction)

        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 1, 9.5)])
        )

        assert result.kind == "persistence"
        assert "refused" in result.message


class TestBestEffort:
    """Test BEST_EFFORT submission."""

    @pytest.mark.asyncio
    async def test_partial_fulfilment(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
    ) -> None:
        result = await manager.submit_order(
            make_order(
                [
                    OrderItemDTO("burger", "Burger", 3, 9.5),
                    OrderItemDTO("fries", "Fries", 1, 3.0),
                ]
            ),
            policy=FulfillmentPolicy.BEST_EFFORT,
        )

        assert result.ok
        submission = result.value
        assert submission.policy is FulfillmentPolicy.BEST_EFFORT
        assert submission.partially_fulfilled
        assert [f.menu_item_id for f in submission.failed_items] == ["fries"]
        assert order_repository.count() == 1
        assert (await burger_inventory.get_stock_level(IngredientId("patty"))).value == 1

    @pytest.mark.asyncio
    async def test_every_line_failing_is_critical(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
    ) -> None:
        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 9, 9.5)]),
            policy=FulfillmentPolicy.BEST_EFFORT,
        )

        assert result.kind == "critical_inconsistency"
        assert order_repository.count() == 1
        assert result.error.order_id in result.message

    @pytest.mark.asyncio
    async def test_requires_inventory_manager(self) -> None:
        orders = AsyncMock()
        manager = OrderManager(
            orders,
            IngredientDeductionService(AsyncMock()),
            policy=FulfillmentPolicy.BEST_EFFORT,
        )

        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 1, 9.5)])
        )

        assert result.kind == "validation"
        orders.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_policy_from_constructor(
        self,
        burger_inventory: InMemoryIngredientRepository,
        menu_item_repository: InMemoryMenuItemRepository,
        order_repository: InMemoryOrderRepository,
        notification_service: AsyncMock,
    ) -> None:
        notifier = LowStockNotifier(notification_service, burger_inventory)
        consume = ConsumeIngredientsCommandHandler(menu_item_repository, burger_inventory)
        manager = OrderManager(
            order_repository,
            IngredientDeductionService(burger_inventory),
            inventory_manager=InventoryManager(consume, notifier),
            policy=FulfillmentPolicy.BEST_EFFORT,
        )

        result = await manager.submit_order(
            make_order([OrderItemDTO("burger", "Burger", 1, 9.5)])
        )

        assert manager.policy is FulfillmentPolicy.BEST_EFFORT
        assert result.value.policy is FulfillmentPolicy.BEST_EFFORT


class TestPreview:
    """Test preview_ingredient_impact."""

    @pytest.mark.asyncio
    async def test_preview_is_read_only(
        self,
        manager: OrderManager,
        burger_inventory: InMemoryIngredientRepository,
        order_repository: InMemoryOrderRepository,
    ) -> None:
        result = await manager.preview_ingredient_impact([OrderItemDTO("burger", "Burger", 2, 9.5)])

        assert result.ok
        impacts = {i.ingredient_id: i for i in result.value}
        assert impacts["bun"].remaining_stock == 6
        assert (await burger_inventory.get_stock_level(IngredientId("bun"))).value == 10
        assert order_repository.count() == 0
