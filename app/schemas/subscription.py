"""
SEA Catering API - Subscription Schemas.

Pydantic schemas for subscription requests and responses.
Meal type and delivery day tokens are checked by the lifecycle service so
that unknown values produce the same error envelope as other rule failures.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class SubscriptionCreateRequest(BaseModel):
    """
    Schema for a new subscription.

    Attributes:
        plan_id: Meal plan to subscribe to.
        meal_types: Any of breakfast, lunch, dinner.
        delivery_days: Any of monday..sunday.
        allergies: Free-text allergy notes.
        total_price: Monthly price shown to the customer, checked server-side.
        phone_number: Optional contact number stored on the user.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "plan_id": 2,
                "meal_types": ["breakfast", "dinner"],
                "delivery_days": ["monday", "wednesday", "friday"],
                "allergies": "peanuts",
                "total_price": 1032000,
                "phone_number": "081234567890"
            }
        }
    )

    plan_id: Optional[int] = Field(None, description="Meal plan id")
    meal_types: List[str] = Field(default_factory=list, description="Selected meal types")
    delivery_days: List[str] = Field(default_factory=list, description="Selected delivery days")
    allergies: Optional[str] = Field(None, description="Allergy notes")
    total_price: Optional[float] = Field(None, description="Client-computed monthly price")
    phone_number: Optional[str] = Field(None, description="Contact phone number")


class SubscriptionUpdateRequest(BaseModel):
    """Replacement selection for an existing subscription."""

    plan_id: Optional[int] = None
    meal_types: List[str] = Field(default_factory=list)
    delivery_days: List[str] = Field(default_factory=list)
    allergies: Optional[str] = None
    total_price: Optional[float] = None


class PauseRequest(BaseModel):
    """
    Schema for pausing a subscription.

    Attributes:
        start_date: First paused day; must be after today.
        end_date: Last paused day; omitted for an open-ended pause.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "start_date": "2025-07-01",
                "end_date": "2025-07-14"
            }
        }
    )

    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PauseRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subscription_id: int
    start_date: date
    end_date: Optional[date] = None


class SubscriptionResponse(BaseModel):
    """Subscription with its selections and current pause state."""

    id: int
    user_id: int
    meal_plan_id: int
    meal_plan_name: Optional[str] = None
    meal_plan_price: Optional[float] = None
    meal_types: List[str]
    delivery_days: List[str]
    allergies: Optional[str] = None
    total_price: float
    status: str
    is_paused: bool = False
    paused_until: Optional[date] = None
    created_at: Optional[datetime] = None


class PauseResponse(BaseModel):
    message: str
    pause: PauseRecordResponse
    subscription: SubscriptionResponse


class SubscriptionActionResponse(BaseModel):
    message: str
    subscription: SubscriptionResponse
