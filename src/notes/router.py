"""
Note Router - API endpoints for writing and reading care notes.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..exceptions import AppException
from ..auth.dependencies import require_user, require_doctor
from ..auth.exceptions import AuthException
from ..doctors.models import Doctor
from .schemas import (
    NoteCreate,
    NoteUpdate,
    NoteResponse,
    NoteDetailResponse,
    NoteListResponse,
    NoteDeletedResponse
)
from .service import add_note, edit_note, delete_note, get_notes

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Notes"])

@router.post("/note", response_model=NoteDetailResponse)
def create_note(
    note_data: NoteCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: Doctor = Depends(require_doctor)
):
    """
    Write a note about a patient

    The patient is emailed after the note is stored.
    """
    try:
        note = add_note(db, current_user, note_data, background_tasks)
    except AuthException:
        raise
    except Exception as e:
        logger.error(f"Error adding note for doctor {current_user.id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return NoteDetailResponse(note=NoteResponse.model_validate(note))

@router.get("/notes/{patient_id}", response_model=NoteListResponse)
def list_notes(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_user)
):
    """
    Get the notes about a patient

    Doctors get only their own notes; patients get every note about the patient.
    """
    try:
        notes = get_notes(db, current_user, patient_id)
    except Exception as e:
        logger.error(f"Error listing notes of patient {patient_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return NoteListResponse(notes=[NoteResponse.model_validate(n) for n in notes])

@router.delete("/note/delete/{note_id}", response_model=NoteDeletedResponse)
def remove_note(
    note_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: Doctor = Depends(require_doctor)
):
    """
    Delete a note by ID
    """
    try:
        delete_note(db, note_id, background_tasks)
    except Exception as e:
        logger.error(f"Error deleting note {note_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return NoteDeletedResponse()

@router.patch("/note/edit/{note_id}", response_model=NoteDetailResponse)
def update_note(
    note_id: int,
    note_data: NoteUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: Doctor = Depends(require_doctor)
):
    """
    Edit the title and/or description of a note

    An unknown id returns ``{"note": null}``.
    """
    try:
        note = edit_note(db, note_id, note_data, background_tasks)
    except Exception as e:
        logger.error(f"Error editing note {note_id}: {str(e)}")
        raise AppException(status.HTTP_400_BAD_REQUEST, str(e))
    return NoteDetailResponse(note=NoteResponse.model_validate(note) if note else None)
