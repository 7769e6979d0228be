"""SQLite engine and session handling shared by the repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from mealplan.config import get_settings
from mealplan.db.models import Base

logger = logging.getLogger(__name__)

# Seconds a writer waits on a locked database before giving up.
SQLITE_BUSY_TIMEOUT = 15

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _configure_connection(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def _create_schema(engine: Engine) -> None:
    try:
        Base.metadata.create_all(engine)
    except OperationalError as exc:
        # Two workers racing on a fresh file both try to create the tables.
        if "already exists" not in str(exc).lower():
            raise
        logger.debug("Schema created concurrently: %s", exc)


def get_engine(database_path: Path | None = None) -> Engine:
    """Return the process-wide engine, creating the database file and schema on first use."""
    global _engine, _session_factory

    if _engine is not None:
        return _engine

    db_path = database_path or get_settings().database_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # Request handlers run in a thread pool, so connections cross threads.
    _engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
    )
    event.listen(_engine, "connect", _configure_connection)
    _create_schema(_engine)
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=True)
    logger.debug("Database engine ready at %s", db_path)
    return _engine


def init_database(database_path: Path | None = None) -> list[str]:
    """Create the schema if needed and return the table names present."""

    engine = get_engine(database_path)
    return sorted(inspect(engine).get_table_names())


def get_session() -> Session:
    if _session_factory is None:
        get_engine()
    assert _session_factory is not None  # for mypy
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on any error.

    Repositories raise ``ValueError`` or ``PermissionError`` from inside the
    scope; the rollback guarantees a rejected write leaves no partial rows.
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Dispose the cached engine so the next call picks up new settings."""

    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "get_engine",
    "init_database",
    "get_session",
    "session_scope",
    "reset_repository_state",
]
