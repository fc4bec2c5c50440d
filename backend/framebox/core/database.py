"""
Database Configuration
"""
import logging
from typing import Generator

from fastapi import HTTPException, status
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from framebox.core.config import settings

logger = logging.getLogger(__name__)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Create an engine. SQLite connections get foreign keys switched on and
    explicit BEGIN handling so SAVEPOINTs work like they do on Postgres.
    """
    is_sqlite = db_url.startswith("sqlite")
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False} if is_sqlite else {},
        echo=echo
    )

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            # let SQLAlchemy emit BEGIN itself
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            # built-in lower() only folds ASCII
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


engine = create_db_engine(settings.database_url, echo=settings.DEBUG)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base model
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.
    Ensures the session is closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Dependency for code that opens its own sessions (e.g. parallel queries)"""
    return SessionLocal


def commit_or_conflict(db: Session, detail: str):
    """
    Commit the unit of work. A constraint violation rolls everything back and
    becomes a 409 so the caller sees the rejection.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Write rejected by the store: %s", e.orig)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def init_db(bind: Engine = None):
    """Initialize database tables"""
    # Import all models to register them with Base
    from framebox.models import (  # noqa: F401
        Category, Client, Service, Transaction, Appointment, AppointmentService
    )
    Base.metadata.create_all(bind=bind or engine)
