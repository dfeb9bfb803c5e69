"""
SEA Catering API - Authentication Schemas.

Pydantic schemas for authentication requests and responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ConfigDict


class RegisterRequest(BaseModel):
    """
    Schema for user registration request.

    Attributes:
        full_name: User's full name.
        email: User's email address.
        password: User's password (min 6 characters).
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "full_name": "Sari Wijaya",
                "email": "sari@example.com",
                "password": "secret123"
            }
        }
    )

    full_name: str = Field(..., min_length=1, max_length=255, description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="User's password (minimum 6 characters)"
    )


class LoginRequest(BaseModel):
    """
    Schema for user login request.

    Attributes:
        email: User's email address.
        password: User's password.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "sari@example.com",
                "password": "secret123"
            }
        }
    )

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserResponse(BaseModel):
    """Public view of a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone_number: Optional[str] = None
    role: int
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    """
    Schema for authentication token response.

    Attributes:
        access_token: JWT access token.
        token_type: Token type (always "bearer").
        user: The authenticated user.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "user": {
                    "id": 1,
                    "full_name": "Sari Wijaya",
                    "email": "sari@example.com",
                    "phone_number": None,
                    "role": 1
                }
            }
        }
    )

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserResponse


class CSRFTokenResponse(BaseModel):
    """CSRF token to echo back in the X-CSRF-Token header."""

    csrf_token: str
    header_name: str = "X-CSRF-Token"
    expires_in: int = Field(..., description="Token lifetime in seconds")
