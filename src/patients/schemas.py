"""
Patient Schemas - Pydantic models for patient profile serialization.
"""
from typing import Optional, List
from ..auth.schemas import CamelModel

class PatientResponse(CamelModel):
    """
    Patient Response Schema - Public patient profile (never the password hash)

    Fields:
    - id: Patient id
    - username, email: Profile fields
    - is_doctor / is_patient: Role flags
    - doctors: Ids of followed doctors
    """
    id: int
    username: str
    email: str
    is_doctor: bool
    is_patient: bool
    doctors: List[int] = []

class PatientListResponse(CamelModel):
    """Patient List Response Schema - Used when returning a doctor's patients"""
    patients: List[PatientResponse]

class PatientDetailResponse(CamelModel):
    """Patient Detail Response Schema - A single patient, or null when the id is unknown"""
    patient: Optional[PatientResponse] = None

class SubscriptionResponse(CamelModel):
    """Subscription Response Schema - The patient after a subscribe or unsubscribe"""
    updated_patient: PatientResponse
