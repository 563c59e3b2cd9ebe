"""
Database engine and session management.
"""
from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from moodflow.core.config import settings
from moodflow.core.logging_config import log_info


def _create_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=settings.debug, connect_args=connect_args)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces ON DELETE CASCADE with foreign_keys enabled."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = _create_engine(settings.database_url)


def create_db_and_tables(bind: Engine = None) -> None:
    """Create all tables registered on the SQLModel metadata."""
    # Register table models on the metadata
    from moodflow.models import mood, user  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    log_info("Database tables created/verified")


def get_session() -> Generator[Session, None, None]:
    """Request dependency yielding a session bound to the engine."""
    with Session(engine) as session:
        yield session
