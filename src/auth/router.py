"""
Authentication routes for the care-notes system.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..exceptions import AppException
from .schemas import DoctorSignup, PatientSignup, UserLogin, AuthResponse
from .service import signup_doctor, signup_patient, login_user
from .exceptions import AuthException

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])

@router.post("/doctor/signup", response_model=AuthResponse, response_model_exclude_none=True, summary="Doctor Signup")
def doctor_signup_route(
    signup_data: DoctorSignup,
    db: Session = Depends(get_db)
):
    """
    Doctor signup endpoint.

    Creates the doctor and returns a token with the doctor's public profile.

    Raises:
        HTTPException: 400 for missing fields, invalid email, weak password,
            duplicate email or store failure
    """
    try:
        return signup_doctor(db, signup_data)
    except AuthException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during doctor signup: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))

@router.post("/patient/signup", response_model=AuthResponse, response_model_exclude_none=True, summary="Patient Signup")
def patient_signup_route(
    signup_data: PatientSignup,
    db: Session = Depends(get_db)
):
    """
    Patient signup endpoint.

    Creates the patient and returns a token with the patient's public profile.
    """
    try:
        return signup_patient(db, signup_data)
    except AuthException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during patient signup: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))

@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True, summary="User Login")
def login_route(
    login_data: UserLogin,
    db: Session = Depends(get_db)
):
    """
    User login endpoint for doctors and patients.

    Doctors are matched before patients when an email exists in both tables.
    """
    try:
        return login_user(db, login_data)
    except AuthException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during login: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
