"""SEA Catering API - Pydantic Schemas Package."""

from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
    CSRFTokenResponse,
)
from app.schemas.meal_plan import MealPlanResponse
from app.schemas.subscription import (
    SubscriptionCreateRequest,
    SubscriptionUpdateRequest,
    PauseRequest,
    PauseRecordResponse,
    SubscriptionResponse,
    PauseResponse,
    SubscriptionActionResponse,
)
from app.schemas.testimonial import (
    TestimonialCreateRequest,
    TestimonialResponse,
    TestimonialPage,
)
from app.schemas.admin import AdminSubscriptionPage, AdminUserPage

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "CSRFTokenResponse",
    "MealPlanResponse",
    "SubscriptionCreateRequest",
    "SubscriptionUpdateRequest",
    "PauseRequest",
    "PauseRecordResponse",
    "SubscriptionResponse",
    "PauseResponse",
    "SubscriptionActionResponse",
    "TestimonialCreateRequest",
    "TestimonialResponse",
    "TestimonialPage",
    "AdminSubscriptionPage",
    "AdminUserPage",
]
