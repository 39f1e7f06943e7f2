"""
Database connection and session management.
Provides SQLAlchemy engine, session, and base class for the doctor, patient and note tables.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

# SQLite connections are shared with FastAPI's threadpool
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Create SQLAlchemy engine for database connection
engine = create_engine(settings.database_url, connect_args=connect_args)

# Create session factory for database sessions
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# Create base class for declarative models
Base = declarative_base()

def get_db():
    """
    Database dependency - Creates and yields a database session.

    Each request gets its own session. It is closed after the request is
    processed, even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """
    Create the doctor, patient, note and social login tables if they don't exist.

    Model modules are imported here so every table is registered on ``Base``
    before ``create_all`` runs.
    """
    from .auth.models import SocialLoginSession  # noqa: F401
    from .doctors.models import Doctor  # noqa: F401
    from .patients.models import Patient  # noqa: F401
    from .notes.models import Note  # noqa: F401

    Base.metadata.create_all(bind=engine)
