"""Low-stock notifier.

Forwards threshold-crossing ingredients to the notification service.
No threshold logic lives here: callers pass the results they already
filtered. Alert metadata (name, thresholds, unit, cost) comes from the
ingredient repository, never from placeholders.
"""

from dataclasses import replace
from typing import Dict, List, Sequence, Set, Union
import asyncio
import logging

from domain.inventory.core.entities import (
    ConsumptionResult,
    DeductionResult,
    IngredientImpact,
    LowStockAlert,
)
from domain.inventory.core.ports import IIngredientRepository, INotificationService
from domain.inventory.core.value_objects import IngredientId
from domain.shared.errors import PersistenceError
from domain.shared.result import Err, Ok, Result, to_err

logger = logging.getLogger(__name__)

StockResult = Union[ConsumptionResult, DeductionResult, IngredientImpact]


class LowStockNotifier:
    """
    Build LowStockAlerts from consumption results and send them.

    Delivery is fire-and-forget: a failed send is logged and returned as
    ``Err`` but never raised, so order processing carries on. Order paths
    use ``schedule_low_stock`` so a slow notification backend (EmailJS
    retries with backoff) never delays order completion; ``drain`` waits
    for those sends on shutdown.

    Example:
        >>> notifier = LowStockNotifier(notification_service, ingredient_repository)
        >>> result = await notifier.notify_low_stock(
        ...     [r for r in results if r.needs_reorder]
        ... )
    """

    def __init__(
        self,
        notification_service: INotificationService,
        ingredient_repository: IIngredientRepository,
    ):
        self._notifications = notification_service
        self._ingredients = ingredient_repository
        self._pending: Set["asyncio.Task[Result[List[LowStockAlert]]]"] = set()

    def schedule_low_stock(
        self, results: Sequence[StockResult]
    ) -> "asyncio.Task[Result[List[LowStockAlert]]]":
        """Send alerts in a background task; the caller does not wait on delivery."""
        task = asyncio.create_task(self.notify_low_stock(list(results)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug("Low stock alert scheduled", extra={"alert_count": len(results)})
        return task

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled alert to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def notify_low_stock(self, results: Sequence[StockResult]) -> Result[List[LowStockAlert]]:
        """
        Send one alert per result.

        Args:
            results: Consumption/deduction results to alert on

        Returns:
            Ok(sent alerts) (empty when nothing to send),
            Err(PersistenceError) if lookup or delivery failed
        """
        if not results:
            return Ok([])

        try:
            alerts = await self._build_alerts(results)
            if not alerts:
                return Ok([])

            delivered = await self._notifications.send_low_stock_alert(alerts)
        except Exception as e:
            logger.error(
                "Low stock notification failed",
                extra={"alert_count": len(results), "error": str(e)},
                exc_info=True,
            )
            return to_err(e, "Failed to send low stock alert")

        if not delivered:
            logger.error(
                "Low stock alert not delivered",
                extra={"ingredient_ids": [a.ingredient_id for a in alerts]},
            )
            return Err(PersistenceError("Low stock alert could not be delivered"))

        logger.info(
            "Low stock alert sent",
            extra={
                "alert_count": len(alerts),
                "critical_count": sum(1 for a in alerts if a.is_critical),
            },
        )
        return Ok(alerts)

    async def _build_alerts(self, results: Sequence[StockResult]) -> List[LowStockAlert]:
        ids: List[IngredientId] = []
        remaining: Dict[IngredientId, float] = {}
        for result in results:
            ingredient_id = IngredientId.create(result.ingredient_id)
            if ingredient_id not in ids:
                ids.append(ingredient_id)
            remaining[ingredient_id] = result.remaining_stock

        ingredients = {i.id: i for i in await self._ingredients.find_by_ids(ids)}

        alerts: List[LowStockAlert] = []
        for ingredient_id in ids:
            ingredient = ingredients.get(ingredient_id)
            if ingredient is None:
                # Deleted between consumption and alerting; nothing to report on
                logger.warning(
                    "Skipping alert for unknown ingredient",
                    extra={"ingredient_id": str(ingredient_id)},
                )
                continue
            alert = LowStockAlert.from_ingredient(ingredient)
            alerts.append(replace(alert, current_stock=remaining[ingredient_id]))
        return alerts
