"""
SEA Catering API - Subscription Routes.

Customer-facing subscription lifecycle: create, view, edit, pause, resume
and cancel. Every state-changing call requires the X-CSRF-Token header.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, Request, status

from app.dependencies import get_current_user_id, get_lifecycle, require_csrf
from app.middleware.rate_limit import limiter, general_limit
from app.schemas.subscription import (
    SubscriptionCreateRequest,
    SubscriptionUpdateRequest,
    PauseRequest,
    PauseRecordResponse,
    SubscriptionResponse,
    PauseResponse,
    SubscriptionActionResponse,
)
from app.services.subscription_lifecycle import SubscriptionLifecycle

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(general_limit)
def create_subscription(
    request: Request,
    payload: SubscriptionCreateRequest,
    user_id: int = Depends(require_csrf),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """
    Subscribe to a meal plan.

    The submitted ``total_price`` must match
    plan price x meal types x delivery days x 4.3 within 1 IDR.

    Raises:
        ValidationError 400: Missing or invalid plan, selections, phone or price
    """
    subscription = lifecycle.create(
        user_id=user_id,
        plan_id=payload.plan_id,
        meal_types=payload.meal_types,
        delivery_days=payload.delivery_days,
        submitted_price=payload.total_price,
        allergies=payload.allergies,
        phone_number=payload.phone_number,
    )
    return lifecycle.describe(subscription)


@router.get("/mine", response_model=List[SubscriptionResponse])
@limiter.limit(general_limit)
def list_my_subscriptions(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """List the caller's subscriptions with selections and pause state."""
    return [lifecycle.describe(sub) for sub in lifecycle.list_for_user(user_id)]


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
@limiter.limit(general_limit)
def get_subscription(
    request: Request,
    subscription_id: int,
    user_id: int = Depends(get_current_user_id),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    return lifecycle.describe(lifecycle.get_owned(subscription_id, user_id))


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
@limiter.limit(general_limit)
def update_subscription(
    request: Request,
    subscription_id: int,
    payload: SubscriptionUpdateRequest,
    user_id: int = Depends(require_csrf),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """Replace plan, meal types, delivery days and allergies; price is re-checked."""
    subscription = lifecycle.edit(
        subscription_id=subscription_id,
        user_id=user_id,
        plan_id=payload.plan_id,
        meal_types=payload.meal_types,
        delivery_days=payload.delivery_days,
        submitted_price=payload.total_price,
        allergies=payload.allergies,
    )
    return lifecycle.describe(subscription)


@router.delete("/{subscription_id}", response_model=SubscriptionActionResponse)
@limiter.limit(general_limit)
def cancel_subscription(
    request: Request,
    subscription_id: int,
    user_id: int = Depends(require_csrf),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """Cancel an active or paused subscription. Cancellation is final."""
    subscription = lifecycle.cancel(subscription_id, user_id)
    return {
        "message": "Subscription cancelled successfully",
        "subscription": lifecycle.describe(subscription),
    }


@router.post("/{subscription_id}/pause", response_model=PauseResponse)
@limiter.limit(general_limit)
def pause_subscription(
    request: Request,
    subscription_id: int,
    payload: PauseRequest,
    user_id: int = Depends(require_csrf),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """
    Pause an active subscription.

    ``start_date`` must be after today; ``end_date`` is optional and must
    follow ``start_date``.
    """
    record = lifecycle.pause(subscription_id, user_id, payload.start_date, payload.end_date)
    subscription = lifecycle.get_owned(subscription_id, user_id)
    return {
        "message": "Subscription paused successfully",
        "pause": PauseRecordResponse.model_validate(record),
        "subscription": lifecycle.describe(subscription),
    }


@router.delete("/{subscription_id}/pause", response_model=PauseResponse)
@limiter.limit(general_limit)
def resume_subscription(
    request: Request,
    subscription_id: int,
    user_id: int = Depends(require_csrf),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """Resume a paused subscription, ending its pause today."""
    record = lifecycle.resume(subscription_id, user_id)
    subscription = lifecycle.get_owned(subscription_id, user_id)
    return {
        "message": "Subscription resumed successfully",
        "pause": PauseRecordResponse.model_validate(record),
        "subscription": lifecycle.describe(subscription),
    }
