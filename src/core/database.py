"""Database connection and session management.

This module handles the database connection using SQLAlchemy. SQLite is the
default backend; any SQLAlchemy URL can be supplied via DATABASE_URL.
"""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from config import DATA_DIR, DATABASE_URL
from core.exceptions import InternalError
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


def enable_sqlite_write_locking(sqlite_engine: Engine) -> None:
    """Make every SQLite transaction take the database write lock up front.

    pysqlite delays BEGIN until the first write, so two sessions can read the
    same state before either writes. Emitting BEGIN IMMEDIATE ourselves
    serializes transactions; a second writer waits on the busy timeout.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def commit_or_raise(db: Session, failure_message: str) -> None:
    """Commit the session, turning database failures into InternalError.

    Raises:
        InternalError: If the commit fails; the session is rolled back.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s: %s", failure_message, e, exc_info=True)
        raise InternalError(failure_message) from e


# Ensure data directory exists
DATA_DIR.mkdir(parents=True, exist_ok=True)

is_sqlite = DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
if is_sqlite:
    enable_sqlite_write_locking(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db():
    Base.metadata.create_all(bind=engine)

# Initialize DB (create tables if not exist)
init_db()

def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
