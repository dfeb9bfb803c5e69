"""
SEA Catering API - Testimonial Schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class TestimonialCreateRequest(BaseModel):
    """
    Schema for submitting a testimonial.

    Attributes:
        message: Review text (10-500 characters).
        rating: Star rating from 1 to 5.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Fresh meals every day and always on time!",
                "rating": 5
            }
        }
    )

    message: str = Field(..., min_length=10, max_length=500)
    rating: int = Field(..., ge=1, le=5)


class TestimonialResponse(BaseModel):
    id: int
    customer_name: Optional[str] = None
    message: str
    rating: int
    created_at: Optional[datetime] = None


class TestimonialPage(BaseModel):
    items: List[TestimonialResponse]
    total: int
    limit: int
    offset: int
