"""Get low stock alerts query - ingredients at or below reorder point."""

from dataclasses import dataclass
from typing import List, Optional
import logging

from application.inventory.services.low_stock_notifier import LowStockNotifier
from domain.inventory.core.entities import DeductionResult
from domain.inventory.core.ports import IIngredientRepository
from domain.shared.result import Ok, Result, to_err

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetLowStockAlertsQuery:
    """
    Query: list ingredients that need attention.

    Attributes:
        notify: Also forward the list to the notifier (dashboard "send alert")
    """

    notify: bool = False


class GetLowStockAlertsQueryHandler:
    """Handler for GetLowStockAlertsQuery."""

    def __init__(
        self,
        repository: IIngredientRepository,
        notifier: Optional[LowStockNotifier] = None,
    ):
        """
        Initialize handler.

        Args:
            repository: Ingredient repository port
            notifier: Required only for ``notify=True`` queries
        """
        self._repository = repository
        self._notifier = notifier

    async def handle(self, query: GetLowStockAlertsQuery) -> Result[List[DeductionResult]]:
        """
        Execute query.

        Notification failures are logged by the notifier and do not fail
        the query.
        """
        try:
            alerts = await self._repository.get_low_stock_alerts()
        except Exception as e:
            return to_err(e, "Failed to load low stock alerts")
        if not alerts.ok:
            return alerts

        logger.debug("Low stock alerts loaded", extra={"count": len(alerts.value)})

        if query.notify and alerts.value:
            if self._notifier is None:
                logger.warning("Low stock notification requested but no notifier configured")
            else:
                await self._notifier.notify_low_stock(alerts.value)

        return Ok(alerts.value)
