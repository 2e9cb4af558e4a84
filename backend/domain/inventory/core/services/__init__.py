"""Inventory domain services."""

from .stock_planning import (
    aggregate_requirements,
    apply_requirements,
    display_names,
    index_by_id,
    line_availability,
    shortfalls,
    validate_requirements,
)

__all__ = [
    "aggregate_requirements",
    "apply_requirements",
    "display_names",
    "index_by_id",
    "line_availability",
    "shortfalls",
    "validate_requirements",
]
