"""EmailJS notification client - Implements INotificationService port.

Sends the low-stock summary email through the EmailJS REST API.

Key Features:
- Alerts grouped into critical (at or below reorder point) and low
- Circuit breaker (5 failures → 60s timeout)
- Retry logic (exponential backoff) on network errors and 5xx
- Never raises to the caller: delivery failure is reported as False
"""
# mypy: warn-unused-ignores=False

import asyncio
import logging
from datetime import datetime
from typing import Any, List, Optional, Sequence

import httpx
from circuitbreaker import circuit
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from domain.inventory.core.entities import LowStockAlert
from infrastructure.notifications.emailjs.models import (
    EmailJSSendRequest,
    LowStockTemplateParams,
)

logger = logging.getLogger(__name__)


class EmailJSNotificationService:
    """
    EmailJS client implementing INotificationService port.

    Use as an async context manager for a pooled HTTP session; outside a
    context each send opens a short-lived session.

    Example:
        >>> async with EmailJSNotificationService(
        ...     service_id="service_x",
        ...     template_id="low_stock_alert",
        ...     public_key="pk_123",
        ...     manager_email="manager@restaurant.com",
        ... ) as notifier:
        ...     delivered = await notifier.send_low_stock_alert(alerts)
    """

    BASE_URL = "https://api.emailjs.com/api/v1.0/email/send"
    TIMEOUT_S = 10.0

    def __init__(
        self,
        service_id: Optional[str],
        template_id: Optional[str],
        public_key: Optional[str],
        manager_email: Optional[str],
        manager_name: str = "Inventory Manager",
        dashboard_url: str = "http://localhost:3000/dashboard/inventory",
    ) -> None:
        """
        Initialize EmailJS client.

        Args:
            service_id: EmailJS service id
            template_id: EmailJS template id
            public_key: EmailJS public key (sent as ``user_id``)
            manager_email: Alert recipient
            manager_name: Recipient display name
            dashboard_url: Link included in the email
        """
        self._service_id = service_id
        self._template_id = template_id
        self._public_key = public_key
        self._manager_email = manager_email
        self._manager_name = manager_name
        self._dashboard_url = dashboard_url
        self._session: Optional[httpx.AsyncClient] = None

    @property
    def is_configured(self) -> bool:
        """True if every credential and the recipient are set."""
        return all(
            (self._service_id, self._template_id, self._public_key, self._manager_email)
        )

    async def __aenter__(self) -> "EmailJSNotificationService":
        """Async context manager entry."""
        self._session = httpx.AsyncClient(timeout=httpx.Timeout(self.TIMEOUT_S))
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    async def send_low_stock_alert(self, alerts: Sequence[LowStockAlert]) -> bool:
        """
        Send one summary email for ``alerts``.

        Implements INotificationService.send_low_stock_alert() port.

        Returns:
            True if delivered (or nothing to send), False otherwise
        """
        if not self.is_configured:
            logger.warning("EmailJS not configured, low stock alert not sent")
            return False

        if not alerts:
            return True

        request = self.build_request(alerts, datetime.now())

        try:
            if self._session is not None:
                await self._post(self._session, request)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.TIMEOUT_S)) as session:
                    await self._post(session, request)
        except Exception as e:
            logger.error(
                "Failed to send low stock alert email",
                extra={"alert_count": len(alerts), "error": str(e)},
            )
            return False

        logger.info(
            "Low stock alert email sent",
            extra={
                "alert_count": len(alerts),
                "critical_count": request.template_params.critical_count,
            },
        )
        return True

    def build_request(
        self, alerts: Sequence[LowStockAlert], now: datetime
    ) -> EmailJSSendRequest:
        """
        Build the EmailJS request for ``alerts``.

        Critical: at or below reorder point.
        Low: above reorder point, at or below min stock.
        """
        critical = [a for a in alerts if a.is_critical]
        low = [a for a in alerts if not a.is_critical and a.current_stock <= a.min_stock]

        params = LowStockTemplateParams(
            to_name=self._manager_name,
            to_email=self._manager_email or "",
            total_alerts=str(len(alerts)),
            critical_count=str(len(critical)),
            low_count=str(len(low)),
            alert_date=f"{now:%B} {now.day}, {now:%Y}",
            alert_time=f"{now:%I:%M %p}",
            dashboard_url=self._dashboard_url,
            critical_items_list=self._format_critical(critical) or "None",
            low_items_list=self._format_low(low) or "None",
        )
        return EmailJSSendRequest(
            service_id=self._service_id or "",
            template_id=self._template_id or "",
            user_id=self._public_key or "",
            template_params=params,
        )

    @circuit(  # type: ignore[misc]
        failure_threshold=5, recovery_timeout=60, name="emailjs_send"
    )
    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(
            (asyncio.TimeoutError, ConnectionError, httpx.TransportError, httpx.HTTPStatusError)
        ),
        reraise=True,
    )
    async def _post(self, session: httpx.AsyncClient, request: EmailJSSendRequest) -> None:
        response = await session.post(self.BASE_URL, json=request.model_dump())

        if response.status_code >= 500:
            logger.warning("EmailJS server error", extra={"status": response.status_code})
            raise httpx.HTTPStatusError(
                f"Server error {response.status_code}",
                request=response.request,
                response=response,
            )

        if response.status_code != 200:
            # 4xx: bad credentials or template, retrying cannot help
            raise ValueError(f"EmailJS rejected request ({response.status_code}): {response.text}")

    @staticmethod
    def _format_critical(alerts: List[LowStockAlert]) -> str:
        return "\n".join(
            f"{idx}. {a.ingredient_name}: {a.current_stock:g}{a.unit} "
            f"(Min: {a.min_stock:g}{a.unit}, Reorder: {a.reorder_point:g}{a.unit}) - "
            f"${a.cost_per_unit:.2f}/{a.unit}"
            for idx, a in enumerate(alerts, start=1)
        )

    @staticmethod
    def _format_low(alerts: List[LowStockAlert]) -> str:
        return "\n".join(
            f"{idx}. {a.ingredient_name}: {a.current_stock:g}{a.unit} "
            f"(Min: {a.min_stock:g}{a.unit}) - ${a.cost_per_unit:.2f}/{a.unit}"
            for idx, a in enumerate(alerts, start=1)
        )
