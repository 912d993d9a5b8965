"""
Database configuration and session management.
"""

import logging
from sqlalchemy import JSON, Text, create_engine
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("messmate.database")

# Create SQLAlchemy Base
Base = declarative_base()

# Create engine
engine = create_engine(settings.postgres_db_url, echo=settings.db_echo, future=True)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)



def text_array():
    """PostgreSQL TEXT[]; stored as JSON on SQLite"""
    return ARRAY(Text).with_variant(JSON(), "sqlite")


def json_document():
    """PostgreSQL JSONB; stored as JSON on SQLite"""
    return JSONB().with_variant(JSON(), "sqlite")


def init_database():
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
