"""
Database Session Management
============================

Handles database connections and session lifecycle.

Every public operation runs inside ``persistence_scope()``: one session
(one pooled connection) for the whole operation, committed on success,
rolled back on any error, and always closed.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional, Tuple, Type

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from capsulify.config import settings
from capsulify.core.exceptions import OperationFailedError, UserNotFoundError

logger = logging.getLogger(__name__)


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create and configure the database engine.

    Args:
        database_url: Overrides ``settings.database_url`` (tests pass an
            in-memory SQLite URL here)
    """
    database_url = database_url or settings.database_url

    # SQLite-specific configuration
    if database_url.startswith("sqlite"):
        # Ensure data directory exists
        if ":///" in database_url:
            db_path = database_url.split(":///")[1]
            if not db_path.startswith(":memory:"):
                db_dir = os.path.dirname(db_path)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)

        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.app_debug
        )

        # ON DELETE CASCADE on wardrobe/preference rows needs foreign keys enabled
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_engine(database_url, echo=settings.app_debug, pool_pre_ping=True)

    return engine


# Create global engine and session factory
engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def select_schema(db: Session) -> None:
    """Point the session's search_path at the application schema (PostgreSQL only)."""
    if db.get_bind().dialect.name != "postgresql":
        return
    db.execute(
        text("SELECT set_config('search_path', :schema, false)"),
        {"schema": settings.db_schema},
    )


def _rollback_quietly(db: Session) -> None:
    try:
        db.rollback()
    except Exception:
        logger.exception("Rollback failed")


@contextmanager
def get_db_context(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits when the block exits normally, rolls back when it raises, and
    always closes the session. A failing rollback is logged and does not
    replace the original exception.

    Usage:
        with get_db_context() as db:
            db.add(user)
    """
    db = (session_factory or SessionLocal)()
    try:
        select_schema(db)
        yield db
        db.commit()
    except Exception:
        _rollback_quietly(db)
        raise
    finally:
        db.close()


@contextmanager
def persistence_scope(
    operation: str,
    session_factory: Optional[sessionmaker] = None,
    passthrough: Tuple[Type[BaseException], ...] = (UserNotFoundError,),
) -> Generator[Session, None, None]:
    """
    Run one public operation in its own session.

    Exceptions listed in ``passthrough`` propagate unchanged. Anything else
    is logged with its traceback and replaced by
    ``OperationFailedError(operation)``.

    Usage:
        with persistence_scope("create user") as db:
            db.add(User(...))
    """
    try:
        with get_db_context(session_factory) as db:
            yield db
    except passthrough:
        raise
    except Exception:
        logger.exception("Error during '%s'", operation)
        raise OperationFailedError(operation) from None


@contextmanager
def _schema_connection(engine_instance: Engine):
    """Connection in a transaction whose DDL lands in the application schema."""
    with engine_instance.begin() as conn:
        if conn.dialect.name == "postgresql":
            conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.db_schema}"'))
            conn.execute(
                text("SELECT set_config('search_path', :schema, true)"),
                {"schema": settings.db_schema},
            )
        yield conn


def create_all_tables(engine_instance=None):
    """Create all tables in the database."""
    from capsulify.models.base import Base
    import capsulify.models  # noqa: F401  (registers every table on Base.metadata)

    if engine_instance is None:
        engine_instance = engine

    with _schema_connection(engine_instance) as conn:
        Base.metadata.create_all(bind=conn)


def drop_all_tables(engine_instance=None):
    """Drop all tables in the database."""
    from capsulify.models.base import Base
    import capsulify.models  # noqa: F401

    if engine_instance is None:
        engine_instance = engine

    with _schema_connection(engine_instance) as conn:
        Base.metadata.drop_all(bind=conn)
