"""
SEA Catering API - Meal Plan Catalogue.

Default plans and the idempotent seeding used by the admin endpoint and
``scripts/seed_meal_plans.py``.
"""

import logging

from sqlalchemy.orm import Session

from app.database import transaction
from app.models.meal_plan import MealPlan

logger = logging.getLogger(__name__)


# Prices are per meal, in IDR
DEFAULT_MEAL_PLANS = [
    {
        "name": "Diet Plan",
        "price_per_meal": 30000,
        "description": "Balanced, calorie-controlled meals for healthy weight management.",
        "image": "diet-plan.jpg",
    },
    {
        "name": "Protein Plan",
        "price_per_meal": 40000,
        "description": "High-protein meals for active lifestyles and muscle recovery.",
        "image": "protein-plan.jpg",
    },
    {
        "name": "Royal Plan",
        "price_per_meal": 60000,
        "description": "Premium chef-crafted meals with the finest ingredients.",
        "image": "royal-plan.jpg",
    },
]


def seed_meal_plans(db: Session) -> int:
    """
    Insert the default plans that are missing by name.

    Returns:
        int: Number of plans added (0 when all already exist).
    """
    with transaction(db):
        existing = {name for (name,) in db.query(MealPlan.name).all()}
        added = 0
        for plan in DEFAULT_MEAL_PLANS:
            if plan["name"] in existing:
                continue
            db.add(MealPlan(**plan))
            added += 1

    logger.info(f"Seeded {added} meal plans")
    return added
