"""
Patient Service - Business logic for subscriptions and patient-side views.

A subscription is one row in the subscriptions table. The patient's
``doctors`` and the doctor's ``patients`` are both read from it, so a
subscribe or unsubscribe changes both sides at once and concurrent changes
for other patients never overwrite each other.
"""
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import status
import logging

from ..exceptions import AppException
from ..auth.models import UserRole
from ..auth.identities import add_to_array, remove_from_array, find_by_id, find_many_by_ids
from ..doctors.models import Doctor
from .models import Patient

# Set up logging
logger = logging.getLogger(__name__)

def get_patient(db: Session, patient_id: int) -> Optional[Patient]:
    """
    Get a patient by id.

    Args:
        db: Database session
        patient_id: Id of the patient

    Returns:
        Patient, or None when the id is unknown
    """
    return find_by_id(db, UserRole.PATIENT, patient_id)

def get_your_doctors(db: Session, patient: Patient) -> List[Doctor]:
    """Return the doctors a patient is subscribed to"""
    return find_many_by_ids(db, UserRole.DOCTOR, patient.doctors)

def _commit(db: Session, patient: Patient, action: str) -> Patient:
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"{action} failed for patient {patient.id}, rolled back: {str(e)}")
        raise
    db.refresh(patient)
    return patient

def add_doctor_id(db: Session, patient: Patient, doctor_id: int) -> Patient:
    """
    Subscribe a patient to a doctor.

    Subscribing to a doctor already in the patient's list changes nothing,
    including when a concurrent request for the same pair commits first.

    Args:
        db: Database session
        patient: The authenticated patient
        doctor_id: Doctor to follow

    Returns:
        Patient: The patient with the updated list

    Raises:
        AppException: If no doctor has this id
    """
    if doctor_id in patient.doctors:
        return patient

    doctor = find_by_id(db, UserRole.DOCTOR, doctor_id)
    if doctor is None:
        raise AppException(status.HTTP_400_BAD_REQUEST, "No such doctor.")

    add_to_array(db, patient, "doctors", doctor_id)
    try:
        patient = _commit(db, patient, "Subscribe")
    except IntegrityError:
        logger.info(f"Patient {patient.id} was already subscribed to doctor {doctor_id}")
        db.refresh(patient)
        return patient

    logger.info(f"Patient {patient.id} subscribed to doctor {doctor_id}")
    return patient

def remove_doctor_id(db: Session, patient: Patient, doctor_id: int) -> Patient:
    """
    Unsubscribe a patient from a doctor.

    Unsubscribing from a doctor the patient never followed, or from an
    unknown id, succeeds without changes.

    Args:
        db: Database session
        patient: The authenticated patient
        doctor_id: Doctor to stop following

    Returns:
        Patient: The patient with the updated list
    """
    remove_from_array(db, patient, "doctors", doctor_id)

    patient = _commit(db, patient, "Unsubscribe")
    logger.info(f"Patient {patient.id} unsubscribed from doctor {doctor_id}")
    return patient
