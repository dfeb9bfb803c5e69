"""
SEA Catering API - User ORM Model.

User model with credentials, contact details and role.
"""

from datetime import datetime, timezone
from enum import IntEnum

from sqlalchemy import Column, Integer, SmallInteger, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base


class UserRole(IntEnum):
    """Stored role codes."""

    ADMIN = 0
    USER = 1


class User(Base):
    """
    User model representing application users.

    Attributes:
        id: Unique identifier.
        full_name: User's display name.
        email: User's email address (unique, indexed).
        password_hash: Bcrypt-hashed password.
        phone_number: Contact number captured at subscription time.
        role: 0 for administrators, 1 for customers.
        created_at: Account creation timestamp.
    """

    __tablename__ = "users"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Profile
    full_name = Column(
        String(255),
        nullable=False
    )
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True
    )
    password_hash = Column(
        String(255),
        nullable=False
    )
    phone_number = Column(
        String(20),
        nullable=True
    )
    role = Column(
        SmallInteger,
        nullable=False,
        default=int(UserRole.USER)
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    subscriptions = relationship("Subscription", back_populates="user")
    testimonials = relationship("Testimonial", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
