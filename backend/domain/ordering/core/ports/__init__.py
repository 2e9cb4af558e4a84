"""Ordering ports."""

from .order_repository import IOrderRepository

__all__ = ["IOrderRepository"]
