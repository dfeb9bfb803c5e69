"""
SEA Catering API - Delivery Schedule Store.

A subscription's delivery days are a set of weekday codes (Sunday=0 ..
Saturday=6). The set is always replaced as a whole: every row for the
subscription is deleted and the new selection inserted.
"""

import logging
from typing import Iterable, List

from sqlalchemy.orm import Session

from app.models.subscription import DayOfWeek, DeliveryDay
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)

DAY_OF_WEEK_MAP = {day.token: day for day in DayOfWeek}


def parse_delivery_days(tokens: Iterable[str]) -> List[DayOfWeek]:
    """
    Map weekday tokens to codes.

    Tokens are case-insensitive; repeats collapse to one day, first
    occurrence order preserved.

    Raises:
        ValidationError: On an unknown token or an empty selection.
    """
    days: List[DayOfWeek] = []
    for token in tokens or []:
        day = DAY_OF_WEEK_MAP.get(str(token).strip().lower())
        if day is None:
            raise ValidationError(f"Invalid delivery day: {token}", code="invalid_delivery_day")
        if day not in days:
            days.append(day)

    if not days:
        raise ValidationError("At least one delivery day is required", code="delivery_days_required")
    return days


def replace_delivery_days(db: Session, subscription_id: int, days: Iterable[int]) -> None:
    """
    Replace the delivery days of a subscription.

    Runs inside the caller's transaction; nothing is committed here.
    """
    db.query(DeliveryDay).filter(
        DeliveryDay.subscription_id == subscription_id
    ).delete(synchronize_session=False)

    db.add_all(
        DeliveryDay(subscription_id=subscription_id, day_of_the_week=int(day))
        for day in days
    )
    db.flush()


def get_delivery_days(db: Session, subscription_id: int) -> List[int]:
    """Return the weekday codes of a subscription, in weekday order."""
    rows = (
        db.query(DeliveryDay.day_of_the_week)
        .filter(DeliveryDay.subscription_id == subscription_id)
        .order_by(DeliveryDay.day_of_the_week)
        .all()
    )
    return [row.day_of_the_week for row in rows]
