"""
Note Service - Business logic for care notes.

Every successful change queues an email to the note's patient. The email is
sent after the response and its outcome does not affect the change.
"""
from typing import List, Optional
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session
import logging

from ..auth.models import UserRole
from ..auth.identities import Identity, find_by_id, role_of
from ..auth.exceptions import ValidationFailedException
from ..core.notifications import dispatch_note_notification, NOTE_ADDED, NOTE_EDITED, NOTE_DELETED
from ..doctors.models import Doctor
from .models import Note
from .schemas import NoteCreate, NoteUpdate

# Set up logging
logger = logging.getLogger(__name__)

def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

def _notify_patient(db: Session, background_tasks: BackgroundTasks, patient_id: int, subject: str) -> None:
    patient = find_by_id(db, UserRole.PATIENT, patient_id)
    dispatch_note_notification(background_tasks, patient.email if patient else None, subject)

def add_note(db: Session, doctor: Doctor, data: NoteCreate, background_tasks: BackgroundTasks) -> Note:
    """
    Create a note written by ``doctor`` about a patient.

    Args:
        db: Database session
        doctor: The authenticated doctor, recorded as the author
        data: Title, description and patient id
        background_tasks: Request-scoped background tasks for the notification

    Returns:
        Note: The stored note

    Raises:
        ValidationFailedException: If a field is missing
    """
    if not data.title or not data.description or data.patient_id is None:
        raise ValidationFailedException("All fields must be filled.")

    note = Note(
        title=data.title,
        description=data.description,
        patient_id=data.patient_id,
        doctor_id=doctor.id
    )
    db.add(note)
    _commit(db)
    db.refresh(note)
    logger.info(f"Note {note.id} added by doctor {doctor.id} for patient {note.patient_id}")

    _notify_patient(db, background_tasks, note.patient_id, NOTE_ADDED)
    return note

def edit_note(db: Session, note_id: int, data: NoteUpdate, background_tasks: BackgroundTasks) -> Optional[Note]:
    """
    Change the title and/or description of a note.

    Args:
        db: Database session
        note_id: Id of the note
        data: Fields to change; absent fields keep their value
        background_tasks: Request-scoped background tasks for the notification

    Returns:
        The updated note, or None when the id is unknown
    """
    note = db.get(Note, note_id)
    if note is None:
        logger.info(f"Edit of unknown note {note_id} ignored")
        return None

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(note, field, value)
    _commit(db)
    db.refresh(note)
    logger.info(f"Note {note.id} edited")

    _notify_patient(db, background_tasks, note.patient_id, NOTE_EDITED)
    return note

def delete_note(db: Session, note_id: int, background_tasks: BackgroundTasks) -> None:
    """
    Delete a note by id. Deleting an unknown id succeeds without changes.

    Args:
        db: Database session
        note_id: Id of the note
        background_tasks: Request-scoped background tasks for the notification
    """
    note = db.get(Note, note_id)
    if note is None:
        logger.info(f"Delete of unknown note {note_id} ignored")
        return

    patient_id = note.patient_id
    db.delete(note)
    _commit(db)
    logger.info(f"Note {note_id} deleted")

    _notify_patient(db, background_tasks, patient_id, NOTE_DELETED)

def get_notes(db: Session, user: Identity, patient_id: int) -> List[Note]:
    """
    List the notes about a patient that ``user`` may see.

    A doctor sees only the notes they wrote about the patient. A patient sees
    every note about the requested patient, whoever wrote it.

    Args:
        db: Database session
        user: The authenticated doctor or patient
        patient_id: Patient whose notes are requested

    Returns:
        Notes in creation order
    """
    query = db.query(Note).filter(Note.patient_id == patient_id)
    if role_of(user) is UserRole.DOCTOR:
        query = query.filter(Note.doctor_id == user.id)
    return query.order_by(Note.id).all()
