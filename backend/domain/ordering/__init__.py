"""Ordering bounded context: order submission and fulfillment policy."""
