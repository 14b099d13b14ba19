"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("fitnesshub.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_options(url: str) -> dict:
    """Extra engine options; SQLite (tests, local runs) needs a shared connection."""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **_engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def init_database():
    """Create any mapped table that does not exist yet"""
    # Import models so every table is registered on Base.metadata
    from domain.models import user, nutrition, meal_plan, community, challenge  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables ensured")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
