import pytest

from app.models.subscription import DayOfWeek, MealType, Subscription
from app.services import delivery_schedule, meal_selection
from app.utils.errors import ValidationError


def test_parse_delivery_days_is_case_insensitive_and_dedupes():
    days = delivery_schedule.parse_delivery_days(["Monday", "wednesday", "MONDAY", " friday "])
    assert days == [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY, DayOfWeek.FRIDAY]


def test_sunday_is_code_zero():
    assert delivery_schedule.parse_delivery_days(["sunday"]) == [0]
    assert delivery_schedule.parse_delivery_days(["saturday"]) == [6]


def test_unknown_delivery_day_rejected():
    with pytest.raises(ValidationError) as exc_info:
        delivery_schedule.parse_delivery_days(["monday", "funday"])
    assert exc_info.value.code == "invalid_delivery_day"
    assert "funday" in exc_info.value.message


def test_empty_delivery_days_rejected():
    with pytest.raises(ValidationError) as exc_info:
        delivery_schedule.parse_delivery_days([])
    assert exc_info.value.code == "delivery_days_required"


def test_parse_meal_types():
    assert meal_selection.parse_meal_types(["dinner", "Breakfast", "dinner"]) == [
        MealType.DINNER,
        MealType.BREAKFAST,
    ]


def test_unknown_or_empty_meal_types_rejected():
    with pytest.raises(ValidationError) as exc_info:
        meal_selection.parse_meal_types(["brunch"])
    assert exc_info.value.code == "invalid_meal_type"

    with pytest.raises(ValidationError) as exc_info:
        meal_selection.parse_meal_types([])
    assert exc_info.value.code == "meal_types_required"


def test_replace_delivery_days_replaces_whole_set(db, lifecycle, user, plans):
    subscription = lifecycle.create(
        user.id, plans["Diet Plan"].id, ["lunch"], ["monday", "tuesday"], 30000 * 2 * 4.3
    )

    delivery_schedule.replace_delivery_days(db, subscription.id, [DayOfWeek.SATURDAY])
    db.commit()

    assert delivery_schedule.get_delivery_days(db, subscription.id) == [6]


def test_decode_legacy_envelope():
    assert meal_selection.decode_legacy_envelope('{"allergies": "nuts", "meal_types": [0, 2]}') == (
        "nuts",
        [0, 2],
    )
    assert meal_selection.decode_legacy_envelope("shellfish") == ("shellfish", None)
    assert meal_selection.decode_legacy_envelope('{"note": "x"}') == ('{"note": "x"}', None)
    assert meal_selection.decode_legacy_envelope(None) == (None, None)


def test_legacy_envelope_row_reads_all_meal_types(db, user, plans):
    subscription = Subscription(
        user_id=user.id,
        meal_plan_id=plans["Protein Plan"].id,
        meal_type=0,
        total_price=1032000,
        allergies='{"allergies": "peanuts", "meal_types": [0, 2]}',
        status="active",
    )
    db.add(subscription)
    db.commit()

    assert meal_selection.get_meal_types(db, subscription) == [0, 2]
    assert meal_selection.get_allergies(subscription) == "peanuts"


def test_row_without_relation_or_envelope_falls_back_to_primary_meal_type(db, user, plans):
    subscription = Subscription(
        user_id=user.id,
        meal_plan_id=plans["Diet Plan"].id,
        meal_type=1,
        total_price=30000 * 4.3,
        allergies="gluten",
        status="active",
    )
    db.add(subscription)
    db.commit()

    assert meal_selection.get_meal_types(db, subscription) == [1]
    assert meal_selection.get_allergies(subscription) == "gluten"
