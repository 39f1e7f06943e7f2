"""
Doctor Model - Stores doctor identities; subscribed patients are read from subscriptions.
"""
from typing import List
from sqlalchemy import Column, String
from sqlalchemy.orm import object_session
from ..database import Base
from ..auth.models import IdentityMixin, UserRole
from ..patients.models import Subscription

class Doctor(IdentityMixin, Base):
    """
    Doctor Model - Stores doctor-specific information

    Fields (besides the shared identity columns):
    - specialization: Doctor's medical specialization
    - patients: Ids of subscribed patients, read from the subscriptions table
    """
    __tablename__ = "doctors"
    role = UserRole.DOCTOR

    specialization = Column(String, nullable=True)

    @property
    def patients(self) -> List[int]:
        """Ids of subscribed patients, in subscription order"""
        session = object_session(self)
        if session is None or self.id is None:
            return []
        rows = (
            session.query(Subscription.patient_id)
            .filter(Subscription.doctor_id == self.id)
            .order_by(Subscription.id)
        )
        return [patient_id for (patient_id,) in rows]
