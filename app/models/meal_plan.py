"""
SEA Catering API - MealPlan ORM Model.

Reference data for the meal offerings customers subscribe to.
"""

from sqlalchemy import Column, Float, Integer, String, Text

from app.database import Base


class MealPlan(Base):
    """
    A named meal offering with a fixed per-meal price.

    Attributes:
        id: Unique identifier.
        name: Display name (Diet Plan, Protein Plan, ...).
        price_per_meal: Price of one meal, input to subscription pricing.
        description: Marketing description.
        image: Optional image path.
    """

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(
        String(255),
        nullable=False
    )
    price_per_meal = Column(
        Float,
        nullable=False
    )
    description = Column(Text, nullable=True)
    image = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<MealPlan(id={self.id}, name={self.name}, price_per_meal={self.price_per_meal})>"
