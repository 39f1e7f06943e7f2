"""
Google sign-in routes.

The browser is sent to Google, comes back to the callback, and is then
redirected to the frontend with a one-time session id. The frontend trades
that id for the token at ``/auth/login/success``.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
import httpx
import logging

from ..database import get_db
from ..config import settings
from ..exceptions import AppException
from .service import build_auth_response
from .exceptions import SocialLoginException
from .social import (
    SocialFlow,
    create_state,
    read_state,
    build_authorization_url,
    fetch_google_profile,
    resolve_social_identity,
    store_social_login,
    pop_social_login,
    discard_social_login
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Google Sign-In"])

FAILURE_PATH = "/auth/login/failed"

@router.get("/google", summary="Start Google Sign-In")
def google_sign_in(
    flow: SocialFlow = Query(..., alias="type", description="login, doctor or patient"),
    spec: Optional[str] = Query(None, description="Specialization for new doctor accounts")
):
    """
    Redirect the browser to Google's consent screen.
    """
    state = create_state(flow, spec)
    return RedirectResponse(build_authorization_url(state))

@router.get("/google/callback", summary="Google Sign-In Callback")
def google_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Finish a Google sign-in and hand the frontend a session id.

    Any failure sends the browser to the failure route instead.
    """
    if not code or not state:
        logger.warning("Google callback without code or state")
        return RedirectResponse(FAILURE_PATH)

    try:
        flow, specialization = read_state(state)
        profile = fetch_google_profile(code)
        identity = resolve_social_identity(db, flow, profile, specialization)
        session_id = store_social_login(db, build_auth_response(identity))
    except SocialLoginException as e:
        logger.warning(f"Google sign-in failed: {e.detail}")
        return RedirectResponse(FAILURE_PATH)
    except Exception as e:
        logger.error(f"Unexpected error during Google sign-in: {str(e)}")
        return RedirectResponse(FAILURE_PATH)

    target = httpx.URL(settings.frontend_url, params={"session": session_id})
    return RedirectResponse(str(target))

@router.get("/login/success", summary="Collect Google Sign-In Result")
def google_sign_in_success(
    session: str = Query(..., description="Session id from the frontend redirect"),
    db: Session = Depends(get_db)
):
    """
    Return the token and profile of a finished Google sign-in, once.
    """
    payload = pop_social_login(db, session)
    if payload is None:
        raise AppException(status.HTTP_400_BAD_REQUEST, "No social login in progress.")
    return payload

@router.get("/login/failed", summary="Google Sign-In Failure")
def google_sign_in_failed():
    """
    Report a failed Google sign-in.
    """
    raise SocialLoginException()

@router.get("/logout", summary="Discard Google Sign-In")
def google_logout(
    session: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Forget a pending Google sign-in and return to the frontend.

    Tokens are stateless, so the frontend drops its own copy.
    """
    if session:
        discard_social_login(db, session)
    return RedirectResponse(settings.frontend_url)
