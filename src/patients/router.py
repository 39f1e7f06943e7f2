"""
Patient Router - API endpoints for subscriptions and patient lookups.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..exceptions import AppException
from ..auth.dependencies import require_user, require_patient
from ..doctors.schemas import DoctorResponse, DoctorListResponse
from .models import Patient
from .schemas import PatientResponse, PatientDetailResponse, SubscriptionResponse
from .service import get_patient, get_your_doctors, add_doctor_id, remove_doctor_id

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Patients"])

@router.get("/yourdoctors", response_model=DoctorListResponse)
def list_your_doctors(
    db: Session = Depends(get_db),
    current_user: Patient = Depends(require_patient)
):
    """
    Get the doctors the current patient is subscribed to
    """
    try:
        doctors = get_your_doctors(db, current_user)
    except Exception as e:
        logger.error(f"Error listing doctors of patient {current_user.id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return DoctorListResponse(doctors=[DoctorResponse.model_validate(d) for d in doctors])

@router.patch("/subscribe/{doctor_id}", response_model=SubscriptionResponse)
def subscribe(
    doctor_id: int,
    db: Session = Depends(get_db),
    current_user: Patient = Depends(require_patient)
):
    """
    Subscribe the current patient to a doctor

    Subscribing twice to the same doctor keeps a single entry on both sides.
    """
    try:
        patient = add_doctor_id(db, current_user, doctor_id)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error subscribing patient {current_user.id} to doctor {doctor_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return SubscriptionResponse(updated_patient=PatientResponse.model_validate(patient))

@router.patch("/unsubscribe/{doctor_id}", response_model=SubscriptionResponse)
def unsubscribe(
    doctor_id: int,
    db: Session = Depends(get_db),
    current_user: Patient = Depends(require_patient)
):
    """
    Unsubscribe the current patient from a doctor
    """
    try:
        patient = remove_doctor_id(db, current_user, doctor_id)
    except Exception as e:
        logger.error(f"Error unsubscribing patient {current_user.id} from doctor {doctor_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return SubscriptionResponse(updated_patient=PatientResponse.model_validate(patient))

@router.get("/patient/{patient_id}", response_model=PatientDetailResponse)
def read_patient(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_user)
):
    """
    Get a patient by ID

    An unknown id returns ``{"patient": null}``.
    """
    try:
        patient = get_patient(db, patient_id)
    except Exception as e:
        logger.error(f"Error fetching patient {patient_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return PatientDetailResponse(patient=PatientResponse.model_validate(patient) if patient else None)
