"""
Doctor Router - API endpoints for doctor listings and the doctor's patient list.

Note: Doctor signup is handled through /api/auth/
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..exceptions import AppException
from ..auth.dependencies import require_user, require_doctor
from ..patients.schemas import PatientResponse, PatientListResponse
from .models import Doctor
from .schemas import DoctorResponse, DoctorListResponse, DoctorDetailResponse
from .service import get_doctors, get_doctor, get_my_patients

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Doctors"])

@router.get("/doctors", response_model=DoctorListResponse)
def list_doctors(
    db: Session = Depends(get_db),
    current_user=Depends(require_user)
):
    """
    Get all doctors

    Available to doctors and patients, e.g. for choosing whom to follow.
    """
    try:
        doctors = get_doctors(db)
    except Exception as e:
        logger.error(f"Error listing doctors: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return DoctorListResponse(doctors=[DoctorResponse.model_validate(d) for d in doctors])

@router.get("/mypatients", response_model=PatientListResponse)
def list_my_patients(
    db: Session = Depends(get_db),
    current_user: Doctor = Depends(require_doctor)
):
    """
    Get the patients subscribed to the current doctor
    """
    try:
        patients = get_my_patients(db, current_user)
    except Exception as e:
        logger.error(f"Error listing patients of doctor {current_user.id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return PatientListResponse(patients=[PatientResponse.model_validate(p) for p in patients])

@router.get("/doctor/{doctor_id}", response_model=DoctorDetailResponse)
def read_doctor(
    doctor_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_user)
):
    """
    Get a doctor by ID

    An unknown id returns ``{"doctor": null}``.
    """
    try:
        doctor = get_doctor(db, doctor_id)
    except Exception as e:
        logger.error(f"Error fetching doctor {doctor_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return DoctorDetailResponse(doctor=DoctorResponse.model_validate(doctor) if doctor else None)
