"""Log-only notification adapter (default backend)."""

import logging
from typing import Sequence

from domain.inventory.core.entities import LowStockAlert

logger = logging.getLogger(__name__)


class LoggingNotificationService:
    """
    INotificationService that writes each alert to the application log.

    Critical alerts (at or below reorder point) log at WARNING, the rest
    at INFO. Always reports delivery.
    """

    async def send_low_stock_alert(self, alerts: Sequence[LowStockAlert]) -> bool:
        for alert in alerts:
            logger.log(
                logging.WARNING if alert.is_critical else logging.INFO,
                "Low stock alert",
                extra={
                    "ingredient_id": alert.ingredient_id,
                    "ingredient_name": alert.ingredient_name,
                    "current_stock": alert.current_stock,
                    "min_stock": alert.min_stock,
                    "reorder_point": alert.reorder_point,
                    "unit": alert.unit,
                    "critical": alert.is_critical,
                },
            )
        return True
