"""SEA Catering API - Services Package."""

from .auth import (
    hash_password,
    verify_password,
    create_access_token,
    verify_token,
)
from .pricing import compute_price, price_matches, MONTHLY_MULTIPLIER, PRICE_TOLERANCE
from .pause_ledger import PauseStatus, pause_status
from .subscription_lifecycle import SubscriptionLifecycle
from .csrf import CSRFService
from .token_store import TokenStore, MemoryTokenStore, RedisTokenStore, create_token_store
from .meal_plans import DEFAULT_MEAL_PLANS, seed_meal_plans

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "verify_token",
    "compute_price",
    "price_matches",
    "MONTHLY_MULTIPLIER",
    "PRICE_TOLERANCE",
    "PauseStatus",
    "pause_status",
    "SubscriptionLifecycle",
    "CSRFService",
    "TokenStore",
    "MemoryTokenStore",
    "RedisTokenStore",
    "create_token_store",
    "DEFAULT_MEAL_PLANS",
    "seed_meal_plans",
]
