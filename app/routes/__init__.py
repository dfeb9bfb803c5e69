"""SEA Catering API - Routes Package."""

from app.routes import (
    auth,
    meal_plans,
    subscriptions,
    testimonials,
    admin,
)

__all__ = [
    "auth",
    "meal_plans",
    "subscriptions",
    "testimonials",
    "admin",
]
