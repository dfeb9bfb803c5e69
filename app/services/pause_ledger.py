"""
SEA Catering API - Pause Ledger.

Keeps the history of pause intervals per subscription and answers "is this
subscription paused, and until when".

The subscription's ``status`` column is the ground truth for whether it is
paused. Pause records only supply the display end date; inferring pause
state from record dates disagrees with status whenever the two drift apart.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.subscription import PauseRecord, Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)


@dataclass
class PauseStatus:
    """Derived pause state of a subscription."""

    is_paused: bool
    paused_until: Optional[date] = None
    pause_record_id: Optional[int] = None


def latest_pause_record(db: Session, subscription_id: int) -> Optional[PauseRecord]:
    """Most recently inserted pause record (highest id), open or closed."""
    return (
        db.query(PauseRecord)
        .filter(PauseRecord.subscription_id == subscription_id)
        .order_by(PauseRecord.id.desc())
        .first()
    )


def has_open_pause(db: Session, subscription_id: int, today: date) -> bool:
    """True if any pause record has no end date or ends after ``today``."""
    open_record = (
        db.query(PauseRecord.id)
        .filter(
            PauseRecord.subscription_id == subscription_id,
            or_(PauseRecord.end_date.is_(None), PauseRecord.end_date > today),
        )
        .first()
    )
    return open_record is not None


def pause_status(db: Session, subscription: Subscription) -> PauseStatus:
    """
    Derive the pause state shown to the customer.

    Paused iff status is 'paused'. When paused, ``paused_until`` is the end
    date of the latest pause record, or None for an indefinite pause
    (including a paused subscription with no records at all).
    """
    if subscription.status != SubscriptionStatus.PAUSED.value:
        return PauseStatus(is_paused=False)

    record = latest_pause_record(db, subscription.id)
    if record is None:
        return PauseStatus(is_paused=True)
    return PauseStatus(is_paused=True, paused_until=record.end_date, pause_record_id=record.id)


def open_pause(
    db: Session,
    subscription_id: int,
    start_date: date,
    end_date: Optional[date] = None,
) -> PauseRecord:
    """Insert a new pause record inside the caller's transaction."""
    record = PauseRecord(subscription_id=subscription_id, start_date=start_date, end_date=end_date)
    db.add(record)
    db.flush()
    return record


def close_latest_pause(db: Session, subscription_id: int, today: date) -> PauseRecord:
    """
    End the latest pause record today.

    A paused subscription with no pause record at all gets one synthesised
    (start today) and closed at once, so the ledger matches the status.
    """
    record = latest_pause_record(db, subscription_id)

    if record is None:
        logger.warning(
            f"No pause record found for paused subscription {subscription_id}, creating one for consistency"
        )
        record = open_pause(db, subscription_id, start_date=today)

    record.end_date = today
    db.flush()
    return record
