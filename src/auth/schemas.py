"""
Auth Schemas - Pydantic models for account requests, auth responses and token claims.

Request fields are optional on purpose: the account flows check for missing
values themselves so they can answer with the same message for every field.
JSON keys are camelCase on the wire.
"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base schema that reads snake_case attributes and writes camelCase keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class PatientSignup(CamelModel):
    """
    Patient Signup Schema - Used for patient self-registration

    Fields:
    - username: Display name
    - email: Login email
    - password: Plain text password (hashed before storage)
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class DoctorSignup(PatientSignup):
    """
    Doctor Signup Schema - Used for doctor self-registration

    Extends PatientSignup with:
    - specialization: Doctor's medical specialization
    """
    specialization: Optional[str] = None

class UserLogin(CamelModel):
    """
    User Login Schema - Used for authentication of either role

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: Optional[str] = None
    password: Optional[str] = None

class AuthResponse(CamelModel):
    """
    Auth Response Schema - Returned after signup, login and Google sign-in

    Fields:
    - token: Signed bearer token
    - username, email: Public profile fields
    - user_id: Id of the identity in its own table
    - is_doctor / is_patient: Role flags
    - specialization, patients: Doctor-only fields
    - doctors: Patient-only field
    """
    token: str
    username: str
    email: str
    user_id: int
    is_doctor: bool
    is_patient: bool
    specialization: Optional[str] = None
    patients: Optional[List[int]] = None
    doctors: Optional[List[int]] = None

class TokenPayload(BaseModel):
    """
    Token Payload Schema - The only claims trusted from a verified token

    Fields:
    - user_id: Identity id (claim ``userId``)
    - is_doctor: Doctor flag (claim ``isDoctor``)
    - is_patient: Patient flag (claim ``isPatient``)
    """
    user_id: StrictInt = Field(alias="userId")
    is_doctor: StrictBool = Field(alias="isDoctor")
    is_patient: StrictBool = Field(alias="isPatient")
