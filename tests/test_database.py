"""Tests for engine setup and transactional sessions."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text
from sqlmodel import select

from habitflow.config import BaseConfig
from habitflow.infra.database import create_db_engine, init_database, session_scope
from habitflow.models import Habit

from .conftest import USER_ID


def test_init_database_creates_habit_and_todo_tables(db_engine):
    assert {"habit", "todo"} <= set(inspect(db_engine).get_table_names())


def test_file_database_gets_configured_pragmas(db_engine):
    with db_engine.connect() as conn:
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 5000


def test_pragmas_can_be_disabled(tmp_path):
    config = BaseConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'plain.db'}"
    config.SQLITE_PRAGMAS = {}

    engine = create_db_engine(config)
    try:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "delete"
    finally:
        engine.dispose()


def test_session_scope_commits(db_engine):
    with session_scope(db_engine) as session:
        session.add(Habit(user_id=USER_ID, title="Read"))

    with session_scope(db_engine) as session:
        assert len(session.exec(select(Habit)).all()) == 1


def test_session_scope_rolls_back_on_error(db_engine):
    with pytest.raises(RuntimeError):
        with session_scope(db_engine) as session:
            session.add(Habit(user_id=USER_ID, title="Read"))
            session.flush()
            raise RuntimeError("boom")

    with session_scope(db_engine) as session:
        assert len(session.exec(select(Habit)).all()) == 0


def test_init_database_is_idempotent(db_engine):
    init_database(db_engine)
    assert "habit" in inspect(db_engine).get_table_names()
