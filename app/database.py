"""
SEA Catering API - Database Configuration.

SQLAlchemy engine, session factory, and declarative base for ORM models.
LAZY INITIALIZATION: Engine connects on first use, not at import time.
"""

from contextlib import contextmanager
from typing import Generator, Iterator, Optional
import logging

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from settings import settings

logger = logging.getLogger(__name__)

# Declarative base for ORM models
Base = declarative_base()

# Global engine and session factory (initialized lazily)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite gets thread-sharing enabled (and a single shared connection when
    in-memory); every other backend gets a bounded pool with pre-ping,
    recycling and a connect timeout so no request blocks on storage forever.

    Args:
        database_url: SQLAlchemy connection string.

    Returns:
        Engine: SQLAlchemy engine instance.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        echo=False,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True,      # Validate connections before use
        pool_recycle=3600,       # Recycle connections every hour
        connect_args={
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "application_name": "sea-catering-api",
        },
    )


def get_engine() -> Engine:
    """
    Get or create the SQLAlchemy engine (lazy initialization).

    Returns:
        Engine: SQLAlchemy engine instance.
    """
    global _engine
    if _engine is None:
        logger.info("Creating database engine...")
        try:
            _engine = build_engine(settings.DATABASE_URL)
            logger.info("Database engine created successfully")
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}")
            raise
    return _engine


def get_session_factory() -> sessionmaker:
    """
    Get or create the session factory (lazy initialization).

    Returns:
        sessionmaker: SQLAlchemy session factory.
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db(engine: Optional[Engine] = None) -> None:
    """Create any missing tables for the registered models."""
    # Import models so they register with Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Yields a database session and ensures proper cleanup after request.

    Yields:
        Session: SQLAlchemy database session.

    Example:
        @router.get("/meal-plans")
        def list_plans(db: Session = Depends(get_db)):
            return db.query(MealPlan).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit everything done inside the block, or roll all of it back.

    Lifecycle operations write the subscription row together with its
    dependent rows (delivery days, meal types, pause records); this keeps
    those writes atomic.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
