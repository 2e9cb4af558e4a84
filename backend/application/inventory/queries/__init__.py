"""CQRS Queries for inventory domain."""

from .get_low_stock_alerts import GetLowStockAlertsQuery, GetLowStockAlertsQueryHandler
from .get_stock_level import GetStockLevelQuery, GetStockLevelQueryHandler

__all__ = [
    "GetLowStockAlertsQuery",
    "GetLowStockAlertsQueryHandler",
    "GetStockLevelQuery",
    "GetStockLevelQueryHandler",
]
