"""
Authentication service layer for business logic.

Signup and login run their checks in a fixed order and stop at the first
failure. The identity row is created last, right before the token is issued,
so a failed signup never leaves a partial account behind.
"""
import logging
from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from email_validator import validate_email, EmailNotValidError

from ..core.security import hash_password, verify_password, is_strong_password, create_access_token
from .models import UserRole
from .identities import Identity, find_by_email, create_identity, resolve_login_identity, role_of
from .schemas import AuthResponse, DoctorSignup, PatientSignup, UserLogin
from .exceptions import (
    ValidationFailedException,
    EmailAlreadyExistsException,
    InvalidCredentialsException
)

# Set up logging
logger = logging.getLogger(__name__)

def build_auth_response(identity: Identity) -> AuthResponse:
    """
    Issue a token for an identity and pair it with the public profile.

    Args:
        identity: Doctor or patient row

    Returns:
        AuthResponse without the password hash
    """
    role = role_of(identity)
    extra: Dict[str, Any]
    if role is UserRole.DOCTOR:
        extra = {"specialization": identity.specialization, "patients": list(identity.patients)}
    else:
        extra = {"doctors": list(identity.doctors)}

    return AuthResponse(
        token=create_access_token(identity.id, role),
        username=identity.username,
        email=identity.email,
        user_id=identity.id,
        is_doctor=identity.is_doctor,
        is_patient=identity.is_patient,
        **extra
    )

def _require_fields(*values) -> None:
    if not all(values):
        raise ValidationFailedException("All fields must be filled.")

def _check_email_syntax(email: str) -> None:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationFailedException("Email is not valid.")

def _check_password_strength(password: str) -> None:
    if not is_strong_password(password):
        raise ValidationFailedException("Password not strong enough.")

def _signup(db: Session, role: UserRole, username: str, email: str, password: str, **fields) -> AuthResponse:
    _check_email_syntax(email)
    _check_password_strength(password)

    if find_by_email(db, role, email):
        logger.warning(f"{role.value.title()} signup failed: email already registered")
        raise EmailAlreadyExistsException()

    password_hash = hash_password(password)

    try:
        identity = create_identity(
            db,
            role,
            username=username,
            email=email,
            password_hash=password_hash,
            **fields
        )
    except IntegrityError:
        # A concurrent signup won the race for this email
        logger.warning(f"{role.value.title()} signup lost a race on a duplicate email")
        raise EmailAlreadyExistsException()

    return build_auth_response(identity)

def signup_doctor(db: Session, data: DoctorSignup) -> AuthResponse:
    """
    Register a new doctor.

    Args:
        db: Database session
        data: Username, email, password and specialization

    Returns:
        AuthResponse with a doctor token

    Raises:
        ValidationFailedException: Missing field, invalid email or weak password
        EmailAlreadyExistsException: Email already used by another doctor
    """
    logger.info("Doctor signup attempt")
    _require_fields(data.username, data.email, data.password, data.specialization)
    return _signup(
        db,
        UserRole.DOCTOR,
        data.username,
        data.email,
        data.password,
        specialization=data.specialization
    )

def signup_patient(db: Session, data: PatientSignup) -> AuthResponse:
    """
    Register a new patient.

    Args:
        db: Database session
        data: Username, email and password

    Returns:
        AuthResponse with a patient token

    Raises:
        ValidationFailedException: Missing field, invalid email or weak password
        EmailAlreadyExistsException: Email already used by another patient
    """
    logger.info("Patient signup attempt")
    _require_fields(data.username, data.email, data.password)
    return _signup(db, UserRole.PATIENT, data.username, data.email, data.password)

def login_user(db: Session, data: UserLogin) -> AuthResponse:
    """
    Authenticate a doctor or a patient by email and password.

    Args:
        db: Database session
        data: Email and password

    Returns:
        AuthResponse for the resolved identity

    Raises:
        ValidationFailedException: Missing field
        InvalidCredentialsException: Unknown email or wrong password
    """
    _require_fields(data.email, data.password)

    identity = resolve_login_identity(db, data.email)
    if not identity:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentialsException("Incorrect email.")

    if not verify_password(data.password, identity.password_hash):
        logger.warning(f"Login failed: wrong password for {role_of(identity).value.lower()} {identity.id}")
        raise InvalidCredentialsException("Incorrect password.")

    logger.info(f"Login succeeded for {role_of(identity).value.lower()} {identity.id}")
    return build_auth_response(identity)
