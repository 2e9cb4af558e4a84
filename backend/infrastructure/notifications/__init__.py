"""Low-stock notification adapters."""

from infrastructure.notifications.factory import create_notification_service
from infrastructure.notifications.logging_service import LoggingNotificationService

__all__ = ["LoggingNotificationService", "create_notification_service"]
