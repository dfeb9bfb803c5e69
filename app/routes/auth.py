"""
SEA Catering API - Authentication Routes.

Register, login, current user and CSRF token endpoints.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.database import get_db, transaction
from app.dependencies import get_current_user, get_current_user_id, get_csrf_service
from app.middleware.rate_limit import limiter, auth_limit, general_limit
from app.models.user import User, UserRole
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
    CSRFTokenResponse,
)
from app.services.auth import hash_password, verify_password, create_access_token
from app.services.csrf import CSRFService
from app.utils.errors import AuthenticationError, ConflictError, ValidationError
from app.utils.security import contains_xss, sanitize_input, validate_password_strength

logger = logging.getLogger(__name__)
router = APIRouter()


def _issue_token(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(user.id), "role": int(user.role)})
    return TokenResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_limit)
def register(request: Request, payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new customer account.

    Args:
        payload: RegisterRequest with full_name, email, password

    Returns:
        TokenResponse with access_token and the created user

    Raises:
        ValidationError 400: Bad name or weak password
        ConflictError 409: Email already registered
    """
    if contains_xss(payload.full_name):
        raise ValidationError("Invalid characters detected in name", code="invalid_name")
    full_name = sanitize_input(payload.full_name, "name").strip()
    if not full_name:
        raise ValidationError("Please enter a valid name", code="invalid_name")

    is_valid, message = validate_password_strength(payload.password)
    if not is_valid:
        raise ValidationError(message, code="weak_password")

    email = payload.email.lower()
    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("Email already registered", code="email_taken")

    user = User(
        full_name=full_name,
        email=email,
        password_hash=hash_password(payload.password),
        role=int(UserRole.USER),
    )
    try:
        with transaction(db):
            db.add(user)
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        raise ConflictError("Email already registered", code="email_taken") from e

    logger.info(f"New user registered: {user.email}")
    return _issue_token(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(auth_limit)
def login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate with email and password.

    Raises:
        AuthenticationError 401: Unknown email or wrong password
    """
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Failed login attempt for {payload.email}")
        raise AuthenticationError("Invalid email or password", code="invalid_credentials")

    logger.info(f"User logged in: {user.email}")
    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
@limiter.limit(general_limit)
def me(request: Request, user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return user


@router.get("/csrf-token", response_model=CSRFTokenResponse)
@limiter.limit(general_limit)
async def csrf_token(
    request: Request,
    refresh: bool = False,
    user_id: int = Depends(get_current_user_id),
    csrf: CSRFService = Depends(get_csrf_service),
):
    """
    Issue the CSRF token required by state-changing endpoints.

    The same token is returned until it expires; pass ``refresh=true`` to
    rotate it.
    """
    token = await csrf.refresh(user_id) if refresh else await csrf.issue(user_id)
    return CSRFTokenResponse(csrf_token=token, expires_in=csrf.ttl_seconds)
