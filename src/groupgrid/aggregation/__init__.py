"""Aggregation engine for rolling up numeric columns."""

from groupgrid.aggregation.aggregator import (
    aggregate,
    coerce_number,
)

__all__ = [
    "aggregate",
    "coerce_number",
]
