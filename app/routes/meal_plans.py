"""SEA Catering API - Meal Plan Routes."""

from typing import List
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.middleware.rate_limit import limiter, general_limit
from app.models.meal_plan import MealPlan
from app.models.user import User
from app.schemas.meal_plan import MealPlanResponse
from app.services.meal_plans import seed_meal_plans
from app.utils.errors import NotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[MealPlanResponse])
@limiter.limit(general_limit)
def list_meal_plans(request: Request, db: Session = Depends(get_db)):
    """List all meal plans, cheapest first."""
    return db.query(MealPlan).order_by(MealPlan.price_per_meal, MealPlan.id).all()


@router.get("/{plan_id}", response_model=MealPlanResponse)
@limiter.limit(general_limit)
def get_meal_plan(request: Request, plan_id: int, db: Session = Depends(get_db)):
    plan = db.get(MealPlan, plan_id)
    if plan is None:
        raise NotFoundError("Meal plan not found", code="meal_plan_not_found")
    return plan


@router.post("/seed")
@limiter.limit(general_limit)
def seed(request: Request, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Create the default meal plans (admin only)."""
    added = seed_meal_plans(db)
    return {"message": f"Seeded {added} meal plans", "added": added}
