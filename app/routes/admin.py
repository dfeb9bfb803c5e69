"""
SEA Catering API - Admin Routes.

Read-only listings for administrators.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_lifecycle, require_admin
from app.middleware.rate_limit import limiter, general_limit
from app.models.subscription import Subscription, SubscriptionStatus
from app.models.user import User
from app.schemas.admin import AdminSubscriptionPage, AdminUserPage
from app.schemas.auth import UserResponse
from app.services.subscription_lifecycle import SubscriptionLifecycle
from app.utils.errors import ValidationError

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


@router.get("/subscriptions", response_model=AdminSubscriptionPage)
@limiter.limit(general_limit)
def list_subscriptions(
    request: Request,
    status: Optional[str] = None,
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    lifecycle: SubscriptionLifecycle = Depends(get_lifecycle),
):
    """All subscriptions, newest first, optionally filtered by status."""
    limit = min(limit, MAX_PAGE_SIZE)
    query = db.query(Subscription)
    if status:
        try:
            query = query.filter(Subscription.status == SubscriptionStatus(status).value)
        except ValueError as e:
            raise ValidationError(f"Unknown status: {status}", code="invalid_status") from e

    total = query.count()
    subscriptions = query.order_by(Subscription.id.desc()).offset(offset).limit(limit).all()
    return AdminSubscriptionPage(
        items=[lifecycle.describe(sub) for sub in subscriptions],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/users", response_model=AdminUserPage)
@limiter.limit(general_limit)
def list_users(
    request: Request,
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    limit = min(limit, MAX_PAGE_SIZE)
    total = db.query(User).count()
    users = db.query(User).order_by(User.id).offset(offset).limit(limit).all()
    return AdminUserPage(
        items=[UserResponse.model_validate(user) for user in users],
        total=total,
        limit=limit,
        offset=offset,
    )
