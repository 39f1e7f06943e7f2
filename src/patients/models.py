"""
Patient Model - Stores patient identities and their subscriptions to doctors.
"""
from typing import List
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import object_session
from ..database import Base
from ..auth.models import IdentityMixin, UserRole

class Subscription(Base):
    """
    Subscription Model - One patient following one doctor

    Each pair is a row of its own, so concurrent subscribes and unsubscribes
    only ever insert or delete their own row.

    Fields:
    - id: Primary key, also the subscription order
    - patient_id: Foreign key to Patient model
    - doctor_id: Foreign key to Doctor model
    - created_at: When the patient subscribed
    """
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("patient_id", "doctor_id", name="uq_subscriptions_patient_doctor"),
    )

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Patient(IdentityMixin, Base):
    """
    Patient Model - Stores patient-specific information

    Fields (besides the shared identity columns):
    - doctors: Ids of followed doctors, read from the subscriptions table
    """
    __tablename__ = "patients"
    role = UserRole.PATIENT

    @property
    def doctors(self) -> List[int]:
        """Ids of followed doctors, in subscription order"""
        session = object_session(self)
        if session is None or self.id is None:
            return []
        rows = (
            session.query(Subscription.doctor_id)
            .filter(Subscription.patient_id == self.id)
            .order_by(Subscription.id)
        )
        return [doctor_id for (doctor_id,) in rows]
