"""Notification service factory.

Environment variable: NOTIFICATION_BACKEND
Values:
    - "log": LoggingNotificationService (default)
    - "emailjs": EmailJSNotificationService (requires EMAILJS_* settings)
"""

import logging

from domain.inventory.core.ports import INotificationService
from infrastructure.config import (
    get_emailjs_public_key,
    get_emailjs_service_id,
    get_emailjs_template_id,
    get_inventory_dashboard_url,
    get_inventory_manager_email,
    get_inventory_manager_name,
    get_notification_backend,
)
from infrastructure.notifications.emailjs import EmailJSNotificationService
from infrastructure.notifications.logging_service import LoggingNotificationService

logger = logging.getLogger(__name__)


def create_notification_service() -> INotificationService:
    """Create notification service based on NOTIFICATION_BACKEND env var.

    Returns:
        INotificationService: New adapter instance (never cached)

    Raises:
        ValueError: If emailjs selected but its credentials are missing
    """
    backend = get_notification_backend()

    if backend == "emailjs":
        service = EmailJSNotificationService(
            service_id=get_emailjs_service_id(),
            template_id=get_emailjs_template_id(),
            public_key=get_emailjs_public_key(),
            manager_email=get_inventory_manager_email(),
            manager_name=get_inventory_manager_name(),
            dashboard_url=get_inventory_dashboard_url(),
        )
        if not service.is_configured:
            raise ValueError(
                "NOTIFICATION_BACKEND=emailjs but EmailJS is not configured. "
                "Set EMAILJS_SERVICE_ID, EMAILJS_TEMPLATE_ID and EMAILJS_PUBLIC_KEY"
            )
        return service

    if backend != "log":
        logger.warning(
            "Unknown notification backend, using log",
            extra={"notification_backend": backend},
        )
    return LoggingNotificationService()
