import logging
from contextlib import contextmanager
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from capsulify.config import settings
from capsulify.core.exceptions import OperationFailedError, UserNotFoundError
from capsulify.database.session import _schema_connection, get_db_context, persistence_scope
from capsulify.models import User


class _FakeSession:
    def __init__(self, engine, fail_rollback=False):
        self._engine = engine
        self.fail_rollback = fail_rollback
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.executed = []

    def execute(self, statement, params=None):
        self.executed.append((str(statement), params))

    def get_bind(self):
        return self._engine

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self.fail_rollback:
            raise RuntimeError("rollback failed")

    def close(self):
        self.closed = True


def test_context_commits_and_closes_on_success(engine):
    session = _FakeSession(engine)
    with get_db_context(lambda: session):
        pass
    assert session.committed
    assert not session.rolled_back
    assert session.closed


def test_context_rolls_back_and_closes_on_error(engine):
    session = _FakeSession(engine)
    with pytest.raises(ValueError):
        with get_db_context(lambda: session):
            raise ValueError("boom")
    assert session.rolled_back
    assert not session.committed
    assert session.closed


def test_failed_rollback_does_not_mask_original_error(engine, caplog):
    session = _FakeSession(engine, fail_rollback=True)
    with caplog.at_level(logging.ERROR):
        with pytest.raises(ValueError, match="boom"):
            with get_db_context(lambda: session):
                raise ValueError("boom")
    assert session.closed
    assert "Rollback failed" in caplog.text


def test_persistence_scope_wraps_errors_without_cause(engine, caplog):
    session = _FakeSession(engine)
    with caplog.at_level(logging.ERROR):
        with pytest.raises(OperationFailedError) as exc_info:
            with persistence_scope("do the thing", lambda: session):
                raise RuntimeError("driver detail")
    assert str(exc_info.value) == "Failed to do the thing"
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__
    assert "driver detail" not in str(exc_info.value)
    assert "Error during 'do the thing'" in caplog.text
    assert session.closed


def test_persistence_scope_passes_user_not_found_through(engine):
    session = _FakeSession(engine)
    with pytest.raises(UserNotFoundError):
        with persistence_scope("get user wardrobe", lambda: session):
            raise UserNotFoundError("user_missing")
    assert session.rolled_back
    assert session.closed


def test_unreachable_database_surfaces_generic_error(tmp_path):
    broken = sessionmaker(bind=create_engine(f"sqlite:///{tmp_path}/missing/dir/capsulify.db"))
    with pytest.raises(OperationFailedError, match="Failed to get user"):
        with persistence_scope("get user", broken) as db:
            db.query(User).first()


def _bind(dialect_name):
    return SimpleNamespace(dialect=SimpleNamespace(name=dialect_name))


def test_postgresql_session_selects_schema_before_body(monkeypatch):
    monkeypatch.setattr(settings, "db_schema", "capsulify_live")
    session = _FakeSession(_bind("postgresql"))

    with get_db_context(lambda: session) as db:
        assert db.executed == [
            ("SELECT set_config('search_path', :schema, false)", {"schema": "capsulify_live"}),
        ]

    assert len(session.executed) == 1
    assert session.committed


def test_sqlite_session_issues_no_schema_statement(engine):
    session = _FakeSession(engine)
    with get_db_context(lambda: session):
        pass
    assert session.executed == []


class _FakeConnection:
    def __init__(self, dialect_name):
        self.dialect = SimpleNamespace(name=dialect_name)
        self.executed = []

    def execute(self, statement, params=None):
        self.executed.append((str(statement), params))


class _FakeEngine:
    def __init__(self, dialect_name):
        self.connection = _FakeConnection(dialect_name)

    @contextmanager
    def begin(self):
        yield self.connection


def test_ddl_connection_creates_and_selects_schema_on_postgresql(monkeypatch):
    monkeypatch.setattr(settings, "db_schema", "capsulify_live")
    fake_engine = _FakeEngine("postgresql")

    with _schema_connection(fake_engine) as conn:
        assert conn is fake_engine.connection

    assert fake_engine.connection.executed == [
        ('CREATE SCHEMA IF NOT EXISTS "capsulify_live"', None),
        ("SELECT set_config('search_path', :schema, true)", {"schema": "capsulify_live"}),
    ]


def test_ddl_connection_skips_schema_on_sqlite():
    fake_engine = _FakeEngine("sqlite")
    with _schema_connection(fake_engine):
        pass
    assert fake_engine.connection.executed == []
