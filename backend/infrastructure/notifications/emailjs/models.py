"""Pydantic models for the EmailJS send API.

``LowStockTemplateParams`` mirrors the variables used by the low-stock
alert template configured in the EmailJS dashboard. Every value is a
string because EmailJS substitutes them verbatim.
"""

from pydantic import BaseModel, Field


class LowStockTemplateParams(BaseModel):
    """Template variables for the low-stock alert email."""

    to_name: str
    to_email: str
    total_alerts: str
    critical_count: str
    low_count: str
    alert_date: str
    alert_time: str
    dashboard_url: str
    critical_items_list: str = Field(
        default="None",
        description="Numbered lines for ingredients at or below reorder point",
    )
    low_items_list: str = Field(
        default="None",
        description="Numbered lines for ingredients above reorder point but at or below min stock",
    )


class EmailJSSendRequest(BaseModel):
    """
    Body of ``POST /api/v1.0/email/send``.

    ``user_id`` is the account public key.
    """

    service_id: str = Field(..., min_length=1)
    template_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    template_params: LowStockTemplateParams
