"""SEA Catering API - Testimonial Routes."""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.database import get_db, transaction
from app.dependencies import require_csrf
from app.middleware.rate_limit import limiter, general_limit
from app.models.testimonial import Testimonial
from app.schemas.testimonial import TestimonialCreateRequest, TestimonialResponse, TestimonialPage
from app.utils.errors import ConflictError, ValidationError
from app.utils.security import contains_xss, sanitize_input

router = APIRouter()
logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 500
MAX_PAGE_SIZE = 50


def _to_response(testimonial: Testimonial) -> TestimonialResponse:
    return TestimonialResponse(
        id=testimonial.id,
        customer_name=testimonial.user.full_name if testimonial.user else None,
        message=testimonial.message,
        rating=testimonial.rating,
        created_at=testimonial.created_at,
    )


@router.post("", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(general_limit)
def create_testimonial(
    request: Request,
    payload: TestimonialCreateRequest,
    user_id: int = Depends(require_csrf),
    db: Session = Depends(get_db),
):
    """
    Submit the caller's testimonial. Each customer may leave one.

    Raises:
        ValidationError 400: Script content or message too short after cleaning
        ConflictError 409: Testimonial already submitted
    """
    if contains_xss(payload.message):
        raise ValidationError("Invalid characters detected in message", code="invalid_message")

    message = sanitize_input(payload.message, "text").strip()
    if not MIN_MESSAGE_LENGTH <= len(message) <= MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message must be between {MIN_MESSAGE_LENGTH} and {MAX_MESSAGE_LENGTH} characters",
            code="invalid_message",
        )

    if db.query(Testimonial.id).filter(Testimonial.user_id == user_id).first():
        raise ConflictError("You have already submitted a testimonial", code="testimonial_exists")

    testimonial = Testimonial(user_id=user_id, message=message, rating=payload.rating)
    try:
        with transaction(db):
            db.add(testimonial)
    except IntegrityError as e:
        raise ConflictError("You have already submitted a testimonial", code="testimonial_exists") from e

    logger.info(f"Testimonial {testimonial.id} submitted by user {user_id}")
    return _to_response(testimonial)


@router.get("", response_model=TestimonialPage)
@limiter.limit(general_limit)
def list_testimonials(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
):
    """Public, newest first. ``limit`` is capped at 50."""
    limit = min(limit, MAX_PAGE_SIZE)
    offset = (page - 1) * limit

    total = db.query(Testimonial).count()
    items = (
        db.query(Testimonial)
        .options(joinedload(Testimonial.user))
        .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return TestimonialPage(
        items=[_to_response(item) for item in items],
        total=total,
        limit=limit,
        offset=offset,
    )
