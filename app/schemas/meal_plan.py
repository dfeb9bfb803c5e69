"""
SEA Catering API - Meal Plan Schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class MealPlanResponse(BaseModel):
    """A meal plan offered to subscribers; ``price_per_meal`` is in IDR."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 2,
                "name": "Protein Plan",
                "price_per_meal": 40000,
                "description": "High-protein meals for active lifestyles",
                "image": "protein-plan.jpg"
            }
        }
    )

    id: int
    name: str
    price_per_meal: float
    description: Optional[str] = None
    image: Optional[str] = None
