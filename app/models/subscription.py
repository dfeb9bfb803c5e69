"""
SEA Catering API - Subscription ORM Models.

Subscription model plus the rows it owns: selected meal types, delivery
days and the pause history.
"""

from datetime import datetime, timezone
from enum import Enum, IntEnum

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.database import Base


class SubscriptionStatus(str, Enum):
    """Lifecycle states. CANCELLED is terminal."""

    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class MealType(IntEnum):
    """Stored meal-type codes."""

    BREAKFAST = 0
    LUNCH = 1
    DINNER = 2

    @property
    def token(self) -> str:
        return self.name.lower()


class DayOfWeek(IntEnum):
    """Stored weekday codes, Sunday first."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def token(self) -> str:
        return self.name.lower()


class Subscription(Base):
    """
    A user's recurring meal subscription.

    Stores the selected plan, the derived monthly price and the lifecycle
    status. Subscriptions are never deleted; cancelling is a status change.

    Attributes:
        id: Unique identifier.
        user_id: Owning user.
        meal_plan_id: Selected meal plan.
        meal_type: Primary meal type code (first selected), kept for older clients.
        total_price: Monthly price derived from plan, meal types and delivery days.
        allergies: Free-text allergy / restriction note.
        status: 'active', 'paused' or 'cancelled'.
        created_at: Subscription creation timestamp.
        updated_at: Last change timestamp.
    """

    __tablename__ = "subscriptions"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign keys
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    meal_plan_id = Column(
        Integer,
        ForeignKey("meal_plans.id"),
        nullable=False
    )

    # Selection
    meal_type = Column(
        SmallInteger,
        nullable=False
    )
    total_price = Column(
        Float,
        nullable=False
    )
    allergies = Column(Text, nullable=True)

    # Lifecycle
    status = Column(
        String(50),
        nullable=False,
        default=SubscriptionStatus.ACTIVE.value,
        index=True
    )

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user = relationship("User", back_populates="subscriptions")
    meal_plan = relationship("MealPlan")
    meal_types = relationship(
        "SubscriptionMealType",
        order_by="SubscriptionMealType.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    delivery_days = relationship(
        "DeliveryDay",
        order_by="DeliveryDay.day_of_the_week",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    pause_records = relationship(
        "PauseRecord",
        order_by="PauseRecord.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation of Subscription."""
        return f"<Subscription(id={self.id}, user_id={self.user_id}, status={self.status})>"


class SubscriptionMealType(Base):
    """One selected meal type of a subscription."""

    __tablename__ = "subscription_meal_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subscription_id = Column(
        Integer,
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    meal_type = Column(SmallInteger, nullable=False)


class DeliveryDay(Base):
    """One weekday on which a subscription is delivered."""

    __tablename__ = "delivery_days"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subscription_id = Column(
        Integer,
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    day_of_the_week = Column(SmallInteger, nullable=False)


class PauseRecord(Base):
    """
    One pause interval in a subscription's history.

    end_date is NULL while the pause is indefinite; resuming sets it to the
    day of the resume.
    """

    __tablename__ = "paused_subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subscription_id = Column(
        Integer,
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<PauseRecord(id={self.id}, subscription_id={self.subscription_id}, "
            f"start={self.start_date}, end={self.end_date})>"
        )
