"""
SEA Catering API - ORM Models Package.

Export all SQLAlchemy models so they register with Base.metadata.
"""

from app.models.user import User, UserRole
from app.models.meal_plan import MealPlan
from app.models.subscription import (
    Subscription,
    SubscriptionStatus,
    SubscriptionMealType,
    DeliveryDay,
    PauseRecord,
    MealType,
    DayOfWeek,
)
from app.models.testimonial import Testimonial

__all__ = [
    "User",
    "UserRole",
    "MealPlan",
    "Subscription",
    "SubscriptionStatus",
    "SubscriptionMealType",
    "DeliveryDay",
    "PauseRecord",
    "MealType",
    "DayOfWeek",
    "Testimonial",
]
