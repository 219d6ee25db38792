"""Database connection, initialization and atomic batches."""

import logging

from sqlalchemy import event
from sqlalchemy.exc import DBAPIError
from sqlmodel import Session, SQLModel, create_engine

from flatshare.config import settings

# Import all models so SQLModel registers them
import flatshare.models  # noqa: F401

logger = logging.getLogger(__name__)

_is_sqlite = settings.database_url.startswith("sqlite")

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db() -> None:
    """Create all tables."""
    SQLModel.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))


def get_session():
    """FastAPI dependency: yields a database session."""
    with Session(engine) as session:
        yield session


def run_atomic(session: Session, statements: list) -> None:
    """Execute statements in the given order as one transaction.

    Either every statement commits or none does.
    """
    try:
        for statement in statements:
            session.exec(statement)
        session.commit()
    except Exception:
        session.rollback()
        raise


def is_missing_table_error(exc: BaseException) -> bool:
    """True if the store reports that a table has not been created."""
    if not isinstance(exc, DBAPIError):
        return False
    text = str(exc.orig).lower()
    return "no such table" in text or ("relation" in text and "does not exist" in text)
