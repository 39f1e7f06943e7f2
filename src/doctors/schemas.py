"""
Doctor Schemas - Pydantic models for doctor profile serialization.

Note: Doctor signup is handled through auth schemas.
"""
from typing import Optional, List
from ..auth.schemas import CamelModel

class DoctorResponse(CamelModel):
    """
    Doctor Response Schema - Public doctor profile (never the password hash)

    Fields:
    - id: Doctor id
    - username, email: Profile fields
    - is_doctor / is_patient: Role flags
    - specialization: Doctor's medical specialization
    - patients: Ids of subscribed patients
    """
    id: int
    username: str
    email: str
    is_doctor: bool
    is_patient: bool
    specialization: Optional[str] = None
    patients: List[int] = []

class DoctorListResponse(CamelModel):
    """Doctor List Response Schema - Used when returning a list of doctors"""
    doctors: List[DoctorResponse]

class DoctorDetailResponse(CamelModel):
    """Doctor Detail Response Schema - A single doctor, or null when the id is unknown"""
    doctor: Optional[DoctorResponse] = None
