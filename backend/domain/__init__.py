"""Domain layer for inventory and order fulfillment.

Business logic for stock tracking and order consumption, decoupled from
persistence and notification infrastructure.
"""
