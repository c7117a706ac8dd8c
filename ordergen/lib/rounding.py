"""Fixed-decimal rounding helpers for order amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

# Precision used when a caller does not configure one (cents).
DEFAULT_PRECISION: int = 2


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert a numeric value to ``Decimal`` without binary float noise.

    Floats go through their shortest ``repr`` so that ``12.3`` becomes
    ``Decimal("12.3")`` rather than ``Decimal("12.300000000000000710...")``.

    Args:
        value: Number or numeric string.

    Returns:
        Decimal representation of the value.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        return Decimal(value)
    if isinstance(value, float):
        # float() also unwraps numpy scalars, whose repr is not numeric
        return Decimal(repr(float(value)))
    return Decimal(int(value))


def precision_unit(places: int) -> Decimal:
    """Return the smallest step at the given precision (``0.01`` for 2 places)."""
    return Decimal(1).scaleb(-max(places, 0))


def round_to_decimal(value: Decimal | float | int | str, places: int) -> Decimal:
    """Round half away from zero to a fixed number of decimal places.

    Args:
        value: Amount to round.
        places: Number of decimal places. Negative values are treated as 0.

    Returns:
        Rounded Decimal. NaN inputs round to zero.
    """
    amount = to_decimal(value)
    if amount.is_nan():
        return Decimal(0)
    return amount.quantize(precision_unit(places), rounding=ROUND_HALF_UP)


def amounts_equal(a: Decimal, b: Decimal, places: int) -> bool:
    """Check whether two amounts are equal within one unit of precision."""
    return abs(a - b) < precision_unit(places)
