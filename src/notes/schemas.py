"""
Note Schemas - Pydantic models for note requests and responses.
"""
from typing import Optional, List
from ..auth.schemas import CamelModel

class NoteCreate(CamelModel):
    """
    Note Creation Schema - Used when a doctor writes a note

    Fields:
    - title: Short note title
    - description: Note body
    - patient_id: Patient the note is about
    """
    title: Optional[str] = None
    description: Optional[str] = None
    patient_id: Optional[int] = None

class NoteUpdate(CamelModel):
    """Note Update Schema - Only the fields present are changed"""
    title: Optional[str] = None
    description: Optional[str] = None

class NoteResponse(CamelModel):
    """Note Response Schema - A stored note"""
    id: int
    title: str
    description: str
    patient_id: int
    doctor_id: Optional[int] = None

class NoteDetailResponse(CamelModel):
    """Note Detail Response Schema - A single note, or null when the id is unknown"""
    note: Optional[NoteResponse] = None

class NoteListResponse(CamelModel):
    """Note List Response Schema - Notes visible to the caller"""
    notes: List[NoteResponse]

class NoteDeletedResponse(CamelModel):
    """Note Deleted Response Schema"""
    message: str = "Deleted."
