"""
Identity store - lookups and mutations over the doctor and patient tables.

Every function takes the role explicitly, so which table is read is always
visible at the call site. The relationship lists of both tables are views of
the subscriptions table: the array helpers insert or delete one subscription
row in the session and leave the commit to the caller.
"""
from typing import Iterable, List, Optional, Tuple, Type, Union
from sqlalchemy.orm import Session
import logging

from .models import UserRole
from ..doctors.models import Doctor
from ..patients.models import Patient, Subscription

# Set up logging
logger = logging.getLogger(__name__)

Identity = Union[Doctor, Patient]

IDENTITY_MODELS = {
    UserRole.DOCTOR: Doctor,
    UserRole.PATIENT: Patient,
}

# Unified login searches doctors first
LOGIN_RESOLUTION_ORDER = (UserRole.DOCTOR, UserRole.PATIENT)

def model_for(role: UserRole) -> Type[Identity]:
    """Return the mapped class holding identities of ``role``"""
    return IDENTITY_MODELS[role]

def role_of(identity: Identity) -> UserRole:
    """Return the role of a loaded identity"""
    return type(identity).role

def find_by_email(db: Session, role: UserRole, email: str) -> Optional[Identity]:
    """
    Find an identity by email within one table.

    Args:
        db: Database session
        role: Table to search
        email: Email address to match exactly

    Returns:
        The identity, or None
    """
    model = model_for(role)
    return db.query(model).filter(model.email == email).first()

def find_by_id(db: Session, role: UserRole, identity_id: int) -> Optional[Identity]:
    """
    Find an identity by id within one table.

    Args:
        db: Database session
        role: Table to search
        identity_id: Primary key

    Returns:
        The identity, or None
    """
    return db.get(model_for(role), identity_id)

def find_many_by_ids(db: Session, role: UserRole, ids: Iterable[int]) -> List[Identity]:
    """Return all identities of ``role`` whose id is in ``ids``, in id order"""
    ids = list(ids)
    if not ids:
        return []
    model = model_for(role)
    return db.query(model).filter(model.id.in_(ids)).order_by(model.id).all()

def find_all(db: Session, role: UserRole) -> List[Identity]:
    """Return every identity of ``role``, in id order"""
    model = model_for(role)
    return db.query(model).order_by(model.id).all()

def resolve_login_identity(db: Session, email: str) -> Optional[Identity]:
    """
    Find the identity a login email refers to.

    Doctors are searched before patients, so an email registered in both
    tables always resolves to the doctor.
    """
    for role in LOGIN_RESOLUTION_ORDER:
        identity = find_by_email(db, role, email)
        if identity:
            return identity
    return None

def create_identity(db: Session, role: UserRole, **fields) -> Identity:
    """
    Insert a new identity and commit it.

    Role flags are set here, never taken from the caller.

    Args:
        db: Database session
        role: Table to insert into
        **fields: Column values (username, email, password_hash, ...)

    Returns:
        The refreshed identity with its store-assigned id
    """
    model = model_for(role)
    identity = model(**fields, **role.flags)

    db.add(identity)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(identity)
    logger.info(f"{role.value.title()} identity created: {identity.id}")
    return identity

# Relationship list of each role and the role its ids point to
RELATIONSHIP_FIELDS = {
    UserRole.DOCTOR: "patients",
    UserRole.PATIENT: "doctors",
}

def _subscription_pair(identity: Identity, field: str, value: int) -> Tuple[int, int]:
    role = role_of(identity)
    if RELATIONSHIP_FIELDS[role] != field:
        raise ValueError(f"{type(identity).__name__} has no relationship list '{field}'")
    if role is UserRole.DOCTOR:
        return value, identity.id
    return identity.id, value

def add_to_array(db: Session, identity: Identity, field: str, value: int) -> None:
    """
    Add ``value`` to a relationship list of ``identity``.

    One subscription row backs both the patient's ``doctors`` and the doctor's
    ``patients``, so the mirrored side changes with it. Adding a pair twice
    fails on commit with an IntegrityError; callers pre-check containment.
    """
    patient_id, doctor_id = _subscription_pair(identity, field, value)
    db.add(Subscription(patient_id=patient_id, doctor_id=doctor_id))

def remove_from_array(db: Session, identity: Identity, field: str, value: int) -> None:
    """Remove ``value`` from a relationship list; absent values are a no-op"""
    patient_id, doctor_id = _subscription_pair(identity, field, value)
    db.query(Subscription).filter(
        Subscription.patient_id == patient_id,
        Subscription.doctor_id == doctor_id
    ).delete(synchronize_session=False)
