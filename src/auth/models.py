"""
Identity Models - Shared identity columns and role definitions.

Doctors and patients live in two separate tables. Both carry the columns of
``IdentityMixin``; the role flags are fixed per table when a row is created.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the care-notes system.

    Roles:
    - DOCTOR: Writes notes about subscribed patients
    - PATIENT: Subscribes to doctors and reads notes written about them
    """
    DOCTOR = "DOCTOR"
    PATIENT = "PATIENT"

    @property
    def flags(self) -> dict:
        """Mutually exclusive role flags as embedded in tokens and responses"""
        return {
            "is_doctor": self is UserRole.DOCTOR,
            "is_patient": self is UserRole.PATIENT,
        }

class IdentityMixin:
    """
    Columns shared by every identity table.

    Fields:
    - id: Store-assigned primary key
    - username: Display name
    - email: Login email, unique within its own table only
    - password_hash: bcrypt digest (never the raw password)
    - is_doctor / is_patient: Role flags, mutually exclusive
    - created_at: When the identity was created
    """
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def is_doctor(cls):
        return Column(Boolean, nullable=False, default=cls.role is UserRole.DOCTOR)

    @declared_attr
    def is_patient(cls):
        return Column(Boolean, nullable=False, default=cls.role is UserRole.PATIENT)

    def __repr__(self):
        """String representation of the identity"""
        return f"<{type(self).__name__}(id={self.id}, email='{self.email}')>"

class SocialLoginSession(Base):
    """
    Completed Google sign-in waiting to be collected by the frontend.

    Fields:
    - id: Random URL-safe key handed to the frontend in the redirect
    - payload: Auth response (token and profile) for this sign-in
    - created_at: When the sign-in completed
    """
    __tablename__ = "social_login_sessions"

    id = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
