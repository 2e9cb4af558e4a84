"""EmailJS low-stock notification adapter."""

from infrastructure.notifications.emailjs.client import EmailJSNotificationService

__all__ = ["EmailJSNotificationService"]
