"""Numeric helpers shared by the catalog and the calculators."""

import math


def finite_or_zero(value) -> float:
    """Return `value` as a float, or 0.0 if it is missing, malformed or not finite."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
