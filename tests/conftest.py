"""Pytest configuration and shared fixtures for HabitFlow tests.

Provides database fixtures, a habit factory, and a Flask test client wired to an
isolated database so tests never touch the real app data directory.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import Session

from habitflow import create_app
from habitflow.config import BaseConfig, TestConfig
from habitflow.infra.database import create_db_engine, create_session_factory, init_database
from habitflow.infra.repositories import SQLModelHabitRepository, SQLModelTodoRepository
from habitflow.models import Habit, HabitStatus, Recurrence, TimeOfDay
from habitflow.services.habits import HabitService

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config at a temp directory and drop ambient credentials."""

    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITFLOW_DATABASE_URL", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    monkeypatch.delenv("HABITFLOW_SCHEDULER", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    config = BaseConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'habits-test.db'}"
    engine = create_db_engine(config)
    init_database(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def todo_repo(session_factory) -> SQLModelTodoRepository:
    return SQLModelTodoRepository(session_factory)


@pytest.fixture
def habit_service(habit_repo) -> HabitService:
    return HabitService(habit_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        title: str = "Test Habit",
        recurrence: Recurrence = Recurrence.DAILY,
        weekdays: list[str] | None = None,
        time_of_day: TimeOfDay = TimeOfDay.DAILY,
        status: HabitStatus = HabitStatus.TODO,
        streak: int = 0,
        last_completed_date: datetime | None = None,
        user_id: str = USER_ID,
        is_deleted: bool = False,
    ) -> Habit:
        habit = Habit(
            user_id=user_id,
            title=title,
            recurrence=recurrence,
            weekdays=weekdays or [],
            time_of_day=time_of_day,
            status=status,
            streak=streak,
            last_completed_date=last_completed_date,
            is_deleted=is_deleted,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


# =============================================================================
# Web Fixtures
# =============================================================================


@pytest.fixture
def app():
    application = create_app(config=TestConfig())
    yield application
    application.extensions["habitflow"].engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": USER_ID}
