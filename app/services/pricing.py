"""
SEA Catering API - Subscription Pricing.

Monthly price = price per meal x meal types x delivery days x 4.3
"""

from numbers import Real
from typing import Optional

from app.utils.errors import ValidationError


# Average weeks per month
MONTHLY_MULTIPLIER = 4.3

# Absolute tolerance, in currency units, when comparing a client-submitted price
PRICE_TOLERANCE = 1.0


def _require_positive(value: Optional[Real], field: str) -> None:
    if value is None or isinstance(value, bool) or not isinstance(value, Real) or value <= 0:
        raise ValidationError(f"{field} must be greater than zero", code="invalid_price_input")


def compute_price(
    plan_price_per_meal: float,
    meal_type_count: int,
    delivery_day_count: int,
) -> float:
    """
    Compute the monthly subscription price.

    No rounding is applied; callers compare with ``price_matches``.

    Args:
        plan_price_per_meal: Meal plan price for a single meal.
        meal_type_count: Number of selected meal types (>= 1).
        delivery_day_count: Number of selected delivery days (>= 1).

    Returns:
        float: Monthly price.

    Raises:
        ValidationError: If any input is missing, zero or negative.

    Example:
        >>> round(compute_price(30000, 2, 3))
        774000
    """
    _require_positive(plan_price_per_meal, "Price per meal")
    _require_positive(meal_type_count, "Meal type count")
    _require_positive(delivery_day_count, "Delivery day count")

    return plan_price_per_meal * meal_type_count * delivery_day_count * MONTHLY_MULTIPLIER


def price_matches(submitted: float, expected: float, tolerance: float = PRICE_TOLERANCE) -> bool:
    """Return True when the submitted price is within ``tolerance`` of the expected one."""
    return abs(submitted - expected) <= tolerance
