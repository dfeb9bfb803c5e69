"""
SEA Catering Meal-Type Envelope Migration

Older subscriptions stored all selected meal types as a JSON envelope in
the allergies column ({"allergies": ..., "meal_types": [...]}). This script
moves them into subscription_meal_types rows and leaves plain allergy text
behind. Rows that already have meal-type rows only get their allergies
unwrapped. Safe to run more than once.

Usage:
    python scripts/migrate_meal_type_envelopes.py [--dry-run]
"""
import argparse
import sys
from pathlib import Path
from typing import Dict
import logging

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session  # noqa: E402

from app.database import get_session_factory, transaction  # noqa: E402
from app.models.subscription import Subscription, SubscriptionMealType  # noqa: E402
from app.services.meal_selection import decode_legacy_envelope, replace_meal_types  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def migrate(db: Session, dry_run: bool = False) -> Dict[str, int]:
    """
    Convert every legacy envelope found in ``subscriptions.allergies``.

    Returns:
        Dict[str, int]: Counts of scanned, converted and skipped rows.
    """
    stats = {"scanned": 0, "converted": 0, "skipped": 0}

    candidates = (
        db.query(Subscription)
        .filter(Subscription.allergies.like("{%"))
        .order_by(Subscription.id)
        .all()
    )

    for subscription in candidates:
        stats["scanned"] += 1
        allergies, codes = decode_legacy_envelope(subscription.allergies)
        if codes is None:
            stats["skipped"] += 1
            continue

        if dry_run:
            logger.info(f"Would convert subscription {subscription.id}: meal_types={codes}")
            stats["converted"] += 1
            continue

        with transaction(db):
            has_rows = (
                db.query(SubscriptionMealType.id)
                .filter(SubscriptionMealType.subscription_id == subscription.id)
                .first()
            )
            if not has_rows and codes:
                replace_meal_types(db, subscription.id, codes)
                subscription.meal_type = codes[0]
            subscription.allergies = allergies or None

        stats["converted"] += 1
        logger.info(f"Converted subscription {subscription.id}")

    return stats


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--dry-run", action="store_true", help="Report without writing")
    args = parser.parse_args()

    db = get_session_factory()()
    try:
        stats = migrate(db, dry_run=args.dry_run)
    finally:
        db.close()

    logger.info(
        f"Scanned {stats['scanned']}, converted {stats['converted']}, skipped {stats['skipped']}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
