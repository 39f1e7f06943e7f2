"""
FastAPI dependencies for authentication and authorization.

Three guards share one pipeline: extract the bearer token, verify it, pick
the identity table from the role flags, load the identity and attach it to
``request.state.user``. Every rejection answers 401 "Not Authorized." no
matter the cause; the cause is only logged.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..core.security import decode_access_token
from .models import UserRole
from .schemas import TokenPayload
from .identities import Identity, find_by_id
from .exceptions import NotAuthorizedException

# Set up logging
logger = logging.getLogger(__name__)

# Bearer scheme for JWT token authentication; missing headers are handled by the guards
bearer_scheme = HTTPBearer(auto_error=False)

def _reject(request: Request, reason: str) -> NotAuthorizedException:
    logger.warning(f"Rejected {request.method} {request.url.path}: {reason}")
    return NotAuthorizedException(reason)

def _verify(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> TokenPayload:
    if credentials is None or not credentials.credentials:
        raise _reject(request, "missing bearer token")
    try:
        return decode_access_token(credentials.credentials)
    except NotAuthorizedException as e:
        raise _reject(request, e.reason)

def _resolve(request: Request, db: Session, role: UserRole, payload: TokenPayload) -> Identity:
    identity = find_by_id(db, role, payload.user_id)
    if identity is None:
        raise _reject(request, f"no {role.value.lower()} with id {payload.user_id}")
    request.state.user = identity
    return identity

def require_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Guard for routes open to both doctors and patients.

    Args:
        request: Incoming request; receives the identity in ``state.user``
        credentials: Bearer credentials from the Authorization header
        db: Database session

    Returns:
        The doctor or patient the token belongs to

    Raises:
        NotAuthorizedException: On any failure, including a token with no role flag set
    """
    payload = _verify(request, credentials)
    if payload.is_doctor:
        return _resolve(request, db, UserRole.DOCTOR, payload)
    if payload.is_patient:
        return _resolve(request, db, UserRole.PATIENT, payload)
    raise _reject(request, "token carries no role")

def require_doctor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Guard for doctor-only routes.

    A token with the patient flag is rejected even if the doctor flag is
    also set.
    """
    payload = _verify(request, credentials)
    if payload.is_patient:
        raise _reject(request, "patient token on a doctor route")
    if not payload.is_doctor:
        raise _reject(request, "token carries no role")
    return _resolve(request, db, UserRole.DOCTOR, payload)

def require_patient(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Guard for patient-only routes.

    A token with the doctor flag is rejected even if the patient flag is
    also set.
    """
    payload = _verify(request, credentials)
    if payload.is_doctor:
        raise _reject(request, "doctor token on a patient route")
    if not payload.is_patient:
        raise _reject(request, "token carries no role")
    return _resolve(request, db, UserRole.PATIENT, payload)
