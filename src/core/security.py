"""
Core security utilities for password hashing and identity tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError
import string
import logging

from ..config import settings
from ..auth.models import UserRole
from ..auth.schemas import TokenPayload
from ..auth.exceptions import InvalidTokenException

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context (bcrypt, cost factor 10)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = set(string.punctuation + " ")

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt with a fresh random salt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Password verification against a malformed hash")
        return False

def is_strong_password(password: str) -> bool:
    """
    Validate password strength.

    Args:
        password: Password to validate

    Returns:
        bool: True if password meets strength requirements
    """
    # Password must be at least 8 characters
    if len(password) < PASSWORD_MIN_LENGTH:
        return False

    # Password must contain at least one ASCII uppercase letter
    if not any(c in string.ascii_uppercase for c in password):
        return False

    # Password must contain at least one ASCII lowercase letter
    if not any(c in string.ascii_lowercase for c in password):
        return False

    # Password must contain at least one ASCII digit
    if not any(c in string.digits for c in password):
        return False

    # Password must contain at least one special character
    if not any(c in PASSWORD_SYMBOLS for c in password):
        return False

    return True

def create_access_token(user_id: int, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT identifying a user and their role.

    Args:
        user_id: Id of the doctor or patient
        role: Role the id belongs to
        expires_delta: Token lifetime (defaults to the configured 3 days)

    Returns:
        str: Encoded JWT token
    """
    flags = role.flags
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "userId": user_id,
        "isDoctor": flags["is_doctor"],
        "isPatient": flags["is_patient"],
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def decode_access_token(token: str) -> TokenPayload:
    """
    Verify and decode a JWT token.

    Only ``userId``, ``isDoctor`` and ``isPatient`` are read from the payload.

    Args:
        token: JWT token string

    Returns:
        TokenPayload: The trusted claims

    Raises:
        InvalidTokenException: If the token is malformed, badly signed, expired
            or lacks the expected claims
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        raise InvalidTokenException(str(e))

    try:
        return TokenPayload.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenException(f"Unexpected token payload: {e.error_count()} invalid claims")
