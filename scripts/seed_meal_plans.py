"""
SEA Catering Meal Plan Seeding Script

Creates the tables if needed and inserts the default meal plans
(Diet, Protein, Royal) that are not already present.

Usage:
    python scripts/seed_meal_plans.py
"""
import sys
from pathlib import Path
import logging

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.database import get_session_factory, init_db  # noqa: E402
from app.services.meal_plans import seed_meal_plans  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    init_db()
    db = get_session_factory()()
    try:
        added = seed_meal_plans(db)
    finally:
        db.close()

    logger.info(f"Done: {added} meal plans added")
    return 0


if __name__ == "__main__":
    sys.exit(main())
