from __future__ import annotations

from decimal import Decimal


def truncate_tax(value: Decimal) -> int:
    """Drop the fractional part toward zero: 12.99 -> 12, never 13.

    int() is exact for any finite Decimal regardless of context precision.
    """
    return int(value)


def abs_decimal(value: Decimal) -> Decimal:
    """Return the absolute value using Decimal.copy_abs for stability."""
    return value.copy_abs()
