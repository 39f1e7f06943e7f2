"""
Note Model - Stores care notes written by doctors about patients.

This model keeps a plain reference to the patient and the authoring doctor;
neither side owns the note.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from ..database import Base

class Note(Base):
    """
    Note Model - Stores care notes

    Fields:
    - id: Primary key for the note
    - title: Short note title
    - description: Note body
    - patient_id: Id of the patient the note is about
    - doctor_id: Id of the authoring doctor (may be empty)
    - created_at: When the note was created
    - updated_at: When the note was last edited
    """
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    patient_id = Column(Integer, index=True, nullable=False)
    doctor_id = Column(Integer, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the Note model"""
        return f"<Note(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id})>"
