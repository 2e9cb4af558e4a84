"""Composition root.

Builds the whole object graph explicitly with constructor injection.
Nothing here is cached at module level: each ``build_application`` call
returns an independent ``InventoryApplication``.

Usage:
    from infrastructure.bootstrap import build_application

    app = build_application()
    result = await app.order_manager.submit_order(order)
    await app.close()
"""

from dataclasses import dataclass
from typing import Optional
import logging

from dotenv import load_dotenv

from application.inventory.commands import (
    ConsumeIngredientsCommandHandler,
    ReplenishIngredientCommandHandler,
)
from application.inventory.queries import (
    GetLowStockAlertsQueryHandler,
    GetStockLevelQueryHandler,
)
from application.inventory.services import IngredientDeductionService, LowStockNotifier
from application.ordering.orchestrators import InventoryManager, OrderManager
from domain.inventory.core.ports import INotificationService
from domain.ordering.core.entities import FulfillmentPolicy
from infrastructure.config import get_fulfillment_policy, get_stock_save_max_attempts
from infrastructure.logging_config import configure_logging
from infrastructure.notifications import create_notification_service
from infrastructure.persistence.factory import Repositories, create_repositories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryApplication:
    """Fully wired application components."""

    repositories: Repositories
    notification_service: INotificationService
    low_stock_notifier: LowStockNotifier
    consume_ingredients: ConsumeIngredientsCommandHandler
    replenish_ingredient: ReplenishIngredientCommandHandler
    deduction_service: IngredientDeductionService
    inventory_manager: InventoryManager
    order_manager: OrderManager
    get_low_stock_alerts: GetLowStockAlertsQueryHandler
    get_stock_level: GetStockLevelQueryHandler

    async def close(self) -> None:
        await self.low_stock_notifier.drain()
        await self.repositories.close()


def build_application(
    repositories: Optional[Repositories] = None,
    notification_service: Optional[INotificationService] = None,
    policy: Optional[FulfillmentPolicy] = None,
    load_env: bool = True,
) -> InventoryApplication:
    """
    Wire every component.

    Args:
        repositories: Pre-built repositories (default: from REPOSITORY_BACKEND)
        notification_service: Alert adapter (default: from NOTIFICATION_BACKEND)
        policy: Default fulfillment policy (default: from FULFILLMENT_POLICY)
        load_env: Load ``.env`` and configure logging first

    Returns:
        InventoryApplication
    """
    if load_env:
        load_dotenv()
        configure_logging()

    repositories = repositories or create_repositories()
    notification_service = notification_service or create_notification_service()
    policy = policy or get_fulfillment_policy()

    notifier = LowStockNotifier(notification_service, repositories.ingredients)
    consume = ConsumeIngredientsCommandHandler(
        repositories.menu_items,
        repositories.ingredients,
        max_attempts=get_stock_save_max_attempts(),
    )
    deduction = IngredientDeductionService(repositories.ingredients)
    inventory_manager = InventoryManager(consume, notifier)
    order_manager = OrderManager(
        repositories.orders,
        deduction,
        inventory_manager=inventory_manager,
        low_stock_notifier=notifier,
        policy=policy,
    )

    logger.info(
        "Application wired",
        extra={
            "fulfillment_policy": policy.value,
            "notification_service": type(notification_service).__name__,
            "ingredient_repository": type(repositories.ingredients).__name__,
        },
    )

    return InventoryApplication(
        repositories=repositories,
        notification_service=notification_service,
        low_stock_notifier=notifier,
        consume_ingredients=consume,
        replenish_ingredient=ReplenishIngredientCommandHandler(repositories.ingredients),
        deduction_service=deduction,
        inventory_manager=inventory_manager,
        order_manager=order_manager,
        get_low_stock_alerts=GetLowStockAlertsQueryHandler(repositories.ingredients, notifier),
        get_stock_level=GetStockLevelQueryHandler(repositories.ingredients),
    )
