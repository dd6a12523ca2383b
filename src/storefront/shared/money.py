"""Monetary rounding helpers.

Amounts are stored as floats on the aggregates; arithmetic that feeds a
stored amount goes through ``Decimal`` so rounding is half-up to the cent.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value: float | int | Decimal | None) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr, so 0.1 becomes Decimal("0.1") not its binary expansion
    return Decimal(str(value))


def round_money(value: float | int | Decimal | None) -> float:
    """Round half-up to two decimal places."""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def sum_money(values: Iterable[float | int | Decimal]) -> Decimal:
    return sum((to_decimal(v) for v in values), Decimal("0"))
