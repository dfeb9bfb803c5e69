"""
SEA Catering API - Authentication Service.

JWT token generation and password hashing utilities.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging

import bcrypt
from jose import jwt, JWTError

from settings import settings

logger = logging.getLogger(__name__)


# Maximum password length for bcrypt (72 bytes)
MAX_PASSWORD_BYTES = 72


def _prepare_password(password: str) -> bytes:
    """
    Prepare password for bcrypt hashing.

    Bcrypt only uses the first 72 bytes of any password.
    This function encodes and truncates to ensure consistent behavior.

    Args:
        password: Plain text password.

    Returns:
        bytes: UTF-8 encoded password, truncated to 72 bytes.
    """
    return password.encode('utf-8')[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Passwords are truncated to 72 bytes (bcrypt limit).

    Args:
        password: Plain text password to hash.

    Returns:
        str: Bcrypt hashed password.

    Example:
        >>> hashed = hash_password("mysecurepassword")
        >>> verify_password("mysecurepassword", hashed)
        True
    """
    password_bytes = _prepare_password(password)
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hashed password to check against.

    Returns:
        bool: True if password matches, False otherwise.
    """
    try:
        password_bytes = _prepare_password(plain_password)
        hashed_bytes = hashed_password.encode('utf-8')
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError as e:
        logger.warning(f"Password verification failed: {e}")
        return False


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Token payload; must include 'sub' (user id) and 'role'.
        expires_delta: Optional custom expiration time.

    Returns:
        str: Encoded JWT access token.

    Example:
        >>> token = create_access_token({"sub": "42", "role": 1})
        >>> len(token) > 0
        True
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc)
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT access token to verify.

    Returns:
        Optional[Dict[str, Any]]: Token payload if valid, None otherwise.

    Example:
        >>> token = create_access_token({"sub": "42", "role": 1})
        >>> verify_token(token)["sub"]
        '42'
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None
