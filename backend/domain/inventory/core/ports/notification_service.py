"""Notification service port (interface)."""

from typing import Protocol, Sequence

from ..entities import LowStockAlert


class INotificationService(Protocol):
    """
    Interface for delivering low-stock alerts.

    Fire-and-forget from the core's perspective: callers log a failed
    delivery and carry on with order processing.

    Implementations:
    - LoggingNotificationService (default)
    - EmailJSNotificationService (email via EmailJS REST API)
    """

    async def send_low_stock_alert(self, alerts: Sequence[LowStockAlert]) -> bool:
        """
        Deliver a batch of alerts.

        Args:
            alerts: Alerts to deliver (non-empty)

        Returns:
            True if delivered, False otherwise
        """
        ...
