"""
Decimal Utilities
judging/scoring/utils.py

Provides precision-safe decimal math for score aggregation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List

PLACES = Decimal("0.0001")


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("32"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def coerce_score(value: Any, max_value: float) -> Decimal:
    """
    Lenient category value parsing.

    Missing, boolean, non-numeric and non-finite values become 0; numeric
    values are clamped to [0, max_value]. Malformed input is never rejected.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not number.is_finite():
        return Decimal("0")
    return clamp(number, Decimal("0"), Decimal(str(max_value)))


def mean(values: List[Decimal]) -> Decimal:
    """Arithmetic mean, 0 for an empty list."""
    if not values:
        return Decimal("0")
    return (sum(values, Decimal("0")) / Decimal(len(values))).quantize(
        PLACES, rounding=ROUND_HALF_UP
    )


def trimmed_mean(values: List[Decimal], qualifying_count: int) -> Decimal:
    """
    Mean after dropping one lowest and one highest value.

    The drop applies only when ``qualifying_count`` is above 2; otherwise all
    values are averaged.
    """
    if qualifying_count <= 2:
        return mean(values)
    ordered = sorted(values)
    return mean(ordered[1:-1])


def population_variance(values: List[Decimal]) -> Decimal:
    """
    Population variance.

    Formula: Σ(value_i - mean)² / n, 0 for fewer than two values.
    """
    if len(values) <= 1:
        return Decimal("0")
    avg = sum(values, Decimal("0")) / Decimal(len(values))
    variance = sum(((v - avg) ** 2 for v in values), Decimal("0")) / Decimal(len(values))
    return variance.quantize(PLACES, rounding=ROUND_HALF_UP)
