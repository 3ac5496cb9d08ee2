# slotify/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL (SQLite for tests). The Database handle is
created at startup, attached to app.state.db and disposed at shutdown.
All models are imported in create_tables() so every table is created in one call.
"""

from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from slotify.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one process."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool   # One shared in-memory connection
        else:
            kwargs = {
                "pool_pre_ping": True,           # Auto-reconnect if DB connection drops
                "pool_size": 10,
                "max_overflow": 20,
            }
        self.engine = create_engine(url, echo=echo, **kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """Creates all DB tables. Safe to call multiple times."""
        from slotify.models.user import User, EmployeeProfile                 # noqa
        from slotify.models.parking_slot import ParkingSlot                   # noqa
        from slotify.models.check_in import CheckIn                           # noqa
        from slotify.models.slot_flag import SlotFlag                         # noqa
        from slotify.models.password_reset_token import PasswordResetToken    # noqa

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections closed")


def _enable_sqlite_foreign_keys(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """All-or-nothing unit of work: commit on success, roll back on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
