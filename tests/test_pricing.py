import pytest

from app.services.pricing import MONTHLY_MULTIPLIER, compute_price, price_matches
from app.utils.errors import ValidationError


def test_diet_plan_two_meals_three_days():
    assert compute_price(30000, 2, 3) == pytest.approx(774000)


def test_protein_plan_two_meals_three_days():
    assert compute_price(40000, 2, 3) == pytest.approx(1032000)


def test_single_meal_single_day_is_one_week_times_multiplier():
    assert compute_price(60000, 1, 1) == pytest.approx(60000 * MONTHLY_MULTIPLIER)


def test_full_week_all_meals_royal_plan():
    assert compute_price(60000, 3, 7) == pytest.approx(5418000)


@pytest.mark.parametrize(
    "args",
    [
        (0, 1, 1),
        (-30000, 1, 1),
        (30000, 0, 1),
        (30000, 1, 0),
        (None, 1, 1),
        (30000, True, 1),
    ],
)
def test_rejects_non_positive_or_missing_inputs(args):
    with pytest.raises(ValidationError) as exc_info:
        compute_price(*args)
    assert exc_info.value.code == "invalid_price_input"


def test_price_tolerance_is_one_unit():
    assert price_matches(774000, 774000.4)
    assert price_matches(774001, 774000)
    assert not price_matches(774001.5, 774000)
    assert not price_matches(770000, 774000)
