"""
Doctor Service - Business logic for doctor listings and doctor-side views.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from ..auth.models import UserRole
from ..auth.identities import find_all, find_by_id, find_many_by_ids
from .models import Doctor
from ..patients.models import Patient

# Set up logging
logger = logging.getLogger(__name__)

def get_doctors(db: Session) -> List[Doctor]:
    """Return every registered doctor"""
    return find_all(db, UserRole.DOCTOR)

def get_doctor(db: Session, doctor_id: int) -> Optional[Doctor]:
    """
    Get a doctor by id.

    Args:
        db: Database session
        doctor_id: Id of the doctor

    Returns:
        Doctor, or None when the id is unknown
    """
    return find_by_id(db, UserRole.DOCTOR, doctor_id)

def get_my_patients(db: Session, doctor: Doctor) -> List[Patient]:
    """
    Get the patients subscribed to a doctor.

    Args:
        db: Database session
        doctor: The authenticated doctor

    Returns:
        Patients whose ids are in the doctor's list
    """
    return find_many_by_ids(db, UserRole.PATIENT, doctor.patients)
