"""
SEA Catering API - Admin Schemas.
"""

from typing import List

from pydantic import BaseModel

from app.schemas.auth import UserResponse
from app.schemas.subscription import SubscriptionResponse


class AdminSubscriptionPage(BaseModel):
    items: List[SubscriptionResponse]
    total: int
    limit: int
    offset: int


class AdminUserPage(BaseModel):
    items: List[UserResponse]
    total: int
    limit: int
    offset: int
