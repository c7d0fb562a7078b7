"""Aggregation engine for rolling up numeric columns over leaf records."""

import logging
import math
import numbers
from collections.abc import Iterable, Sequence
from decimal import Decimal
from fractions import Fraction
from typing import Any

from groupgrid.tree.model import ColumnDescriptor, Record

logger = logging.getLogger(__name__)


def _from_real(value: Any) -> float | int:
    if isinstance(value, Decimal):
        if not value.is_finite():
            return 0
        if value == value.to_integral_value():
            return int(value)
    elif isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


def coerce_number(value: Any) -> float | int:
    """Coerce a field value to a number, falling back to 0.

    Numeric strings are parsed and booleans count as 0/1. Other numeric types
    (``Decimal``, ``Fraction``, numpy scalars) convert to ``int`` when integral
    and ``float`` otherwise. Missing, non-numeric, NaN and infinite values all
    become 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, (numbers.Real, Decimal)):
        return _from_real(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
        if isinstance(number, float) and not math.isfinite(number):
            return 0
        return number
    return 0


def _sum(values: list[float | int]) -> float | int:
    if all(isinstance(v, int) for v in values):
        return sum(values)
    try:
        # fsum is exact, so the result does not depend on leaf order
        return math.fsum(values)
    except OverflowError:
        # an int beyond float range mixed with floats
        total = round(sum(Fraction(v) for v in values))
        logger.warning("Sum exceeds float range, rounding to integer total")
        return total


def aggregate(
    leaves: Iterable[Record],
    columns: Sequence[ColumnDescriptor],
) -> dict[str, float | int]:
    """Sum every number column across the given leaf records.

    Args:
        leaves: Leaf records to roll up (any order)
        columns: Column descriptors; only ``number`` columns are aggregated

    Returns:
        Mapping of aggregable column id to its sum. Non-number columns are
        absent; an empty leaf set maps every aggregable column to 0.
    """
    records = list(leaves)
    stats: dict[str, float | int] = {}
    for column in columns:
        if not column.is_aggregable:
            continue
        stats[column.id] = _sum([coerce_number(r.get(column.id)) for r in records])
    return stats
