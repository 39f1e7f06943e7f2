"""
Google sign-in for doctors and patients.

Everything one sign-in attempt needs travels with that attempt: the flow
type and specialization ride in a signed ``state`` token through Google's
redirect, and the finished auth response waits in its own
``SocialLoginSession`` row until the frontend collects it. Concurrent
attempts never share data.
"""
import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import httpx
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from ..config import settings
from ..core.security import hash_password
from .models import UserRole, SocialLoginSession
from .identities import Identity, find_by_email, create_identity, resolve_login_identity
from .schemas import AuthResponse
from .exceptions import SocialLoginException

# Set up logging
logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_SCOPES = "openid email profile"

STATE_PURPOSE = "google_sign_in"
STATE_EXPIRE_MINUTES = 10
# Uncollected sign-ins are dropped after this long
SESSION_EXPIRE_MINUTES = STATE_EXPIRE_MINUTES
HTTP_TIMEOUT = 10.0

class SocialFlow(str, enum.Enum):
    """What a Google sign-in attempt should do once Google vouches for the email"""
    LOGIN = "login"
    DOCTOR = "doctor"
    PATIENT = "patient"

@dataclass
class GoogleProfile:
    """Verified identity returned by Google"""
    email: str
    name: str

def create_state(flow: SocialFlow, specialization: Optional[str] = None) -> str:
    """
    Sign the per-attempt context that Google echoes back to the callback.

    Args:
        flow: Requested flow
        specialization: Specialization for doctor accounts created by this attempt

    Returns:
        str: Signed, short-lived state token
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=STATE_EXPIRE_MINUTES)
    claims = {
        "purpose": STATE_PURPOSE,
        "flow": flow.value,
        "spec": specialization,
        "nonce": secrets.token_urlsafe(16),
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)

def read_state(state: str) -> Tuple[SocialFlow, Optional[str]]:
    """
    Verify a state token and return the attempt's flow and specialization.

    Raises:
        SocialLoginException: If the state is forged, expired or not a sign-in state
    """
    try:
        claims = jwt.decode(state, settings.secret_key, algorithms=[settings.algorithm])
        if claims.get("purpose") != STATE_PURPOSE:
            raise SocialLoginException("Unexpected state token")
        return SocialFlow(claims["flow"]), claims.get("spec")
    except (JWTError, KeyError, ValueError) as e:
        raise SocialLoginException(f"Invalid state: {str(e)}")

def build_authorization_url(state: str) -> str:
    """Return Google's consent screen URL for this attempt"""
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "response_type": "code",
        "scope": GOOGLE_SCOPES,
        "state": state,
        "prompt": "select_account",
    }
    return str(httpx.URL(GOOGLE_AUTH_URL, params=params))

def fetch_google_profile(code: str) -> GoogleProfile:
    """
    Exchange an authorization code for the user's verified email and name.

    Args:
        code: Authorization code from the callback

    Returns:
        GoogleProfile

    Raises:
        SocialLoginException: If Google rejects the code or the email is not verified
    """
    try:
        with httpx.Client(timeout=HTTP_TIMEOUT) as client:
            token_response = client.post(GOOGLE_TOKEN_URL, data={
                "code": code,
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "redirect_uri": settings.google_redirect_uri,
                "grant_type": "authorization_code",
            })
            token_response.raise_for_status()
            access_token = token_response.json()["access_token"]

            userinfo_response = client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"}
            )
            userinfo_response.raise_for_status()
            userinfo = userinfo_response.json()
    except (httpx.HTTPError, KeyError, ValueError) as e:
        raise SocialLoginException(f"Google token exchange failed: {str(e)}")

    email = userinfo.get("email")
    if not email or not userinfo.get("email_verified", False):
        raise SocialLoginException("Google account has no verified email")

    return GoogleProfile(email=email, name=userinfo.get("name") or email.split("@")[0])

def _unusable_password_hash() -> str:
    # Accounts created through Google have no password anyone knows
    return hash_password(secrets.token_urlsafe(32))

def resolve_social_identity(
    db: Session,
    flow: SocialFlow,
    profile: GoogleProfile,
    specialization: Optional[str] = None
) -> Identity:
    """
    Find or create the identity a Google sign-in refers to.

    ``login`` only finds existing accounts, doctors first. ``doctor`` and
    ``patient`` find the account of that role or create it.

    Raises:
        SocialLoginException: If ``login`` finds no account for the email
    """
    if flow is SocialFlow.LOGIN:
        identity = resolve_login_identity(db, profile.email)
        if identity is None:
            raise SocialLoginException("No account for this Google email")
        return identity

    role = UserRole.DOCTOR if flow is SocialFlow.DOCTOR else UserRole.PATIENT
    identity = find_by_email(db, role, profile.email)
    if identity is not None:
        return identity

    fields: Dict[str, Any] = {
        "username": profile.name,
        "email": profile.email,
        "password_hash": _unusable_password_hash(),
    }
    if role is UserRole.DOCTOR:
        fields["specialization"] = specialization
    logger.info(f"Creating {role.value.lower()} from Google sign-in")
    return create_identity(db, role, **fields)

def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

def _session_cutoff() -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=SESSION_EXPIRE_MINUTES)

def _is_expired(record: SocialLoginSession) -> bool:
    created_at = record.created_at
    if created_at is None:
        return True
    # SQLite hands back naive datetimes; they are stored in UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at < _session_cutoff()

def store_social_login(db: Session, response: AuthResponse) -> str:
    """
    Keep a finished sign-in until the frontend collects it.

    Expired sign-ins that were never collected are deleted in the same commit.

    Returns:
        str: Session id to hand to the frontend
    """
    pruned = db.query(SocialLoginSession).filter(
        SocialLoginSession.created_at < _session_cutoff()
    ).delete(synchronize_session=False)
    if pruned:
        logger.info(f"Pruned {pruned} expired social login sessions")

    session_id = secrets.token_urlsafe(32)
    db.add(SocialLoginSession(
        id=session_id,
        payload=response.model_dump(by_alias=True, exclude_none=True),
        created_at=datetime.now(timezone.utc)
    ))
    _commit(db)
    return session_id

def pop_social_login(db: Session, session_id: str) -> Optional[Dict[str, Any]]:
    """
    Return a finished sign-in once and forget it.

    Returns:
        The stored auth response, or None for an unknown, expired or already
        collected id
    """
    record = db.get(SocialLoginSession, session_id)
    if record is None:
        return None

    expired = _is_expired(record)
    payload = None if expired else dict(record.payload)
    db.delete(record)
    _commit(db)
    if expired:
        logger.warning("Expired social login session discarded")
    return payload

def discard_social_login(db: Session, session_id: str) -> None:
    """Forget a finished sign-in without returning it"""
    record = db.get(SocialLoginSession, session_id)
    if record is not None:
        db.delete(record)
        _commit(db)
