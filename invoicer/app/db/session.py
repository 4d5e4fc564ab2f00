"""Database handle, per-request sessions and the transaction helper.

The engine lives on an explicitly constructed ``Database`` owned by the
application (``app.state.database``): opened by ``create_app``, migrated on
startup and disposed on shutdown.
"""

from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from invoicer.app.core.errors import ConflictError
from invoicer.app.core.logging import get_logger
from invoicer.app.db.migrate import run_migrations

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(url, echo=echo, connect_args=connect_args)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=True)

    def init(self) -> list[str]:
        """Upgrade the schema to head; returns the revisions applied."""
        return run_migrations(self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        # Closing without commit discards anything an aborted request left pending
        db.close()


def _conflict_message(exc: IntegrityError, default: str, messages: Optional[Mapping[str, str]]) -> str:
    detail = str(exc.orig)
    for marker, message in (messages or {}).items():
        if marker in detail:
            return message
    return default


@contextmanager
def atomic(
    db: Session,
    conflict_message: str = "Resource already exists",
    conflict_messages: Optional[Mapping[str, str]] = None,
) -> Iterator[Session]:
    """Commit the enclosed writes as one unit; roll back on any failure.

    Unique constraint violations surface as ``ConflictError``. When
    ``conflict_messages`` maps a constraint name (or the column list SQLite
    reports) to a message, the violated constraint picks the message;
    otherwise ``conflict_message`` is used.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(_conflict_message(exc, conflict_message, conflict_messages)) from exc
    except Exception:
        db.rollback()
        raise
