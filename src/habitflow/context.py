"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelHabitRepository, SQLModelTodoRepository
from .services.coach import CoachClient
from .services.habits import HabitService


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    config: BaseConfig
    engine: Any
    session_factory: Callable[[], Session]

    habit_repo: SQLModelHabitRepository
    todo_repo: SQLModelTodoRepository

    habit_service: HabitService
    coach: CoachClient

    scheduler: Optional[Any] = None


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema, repositories and services for ``config``."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    habit_repo = SQLModelHabitRepository(session_factory)
    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        todo_repo=SQLModelTodoRepository(session_factory),
        habit_service=HabitService(habit_repo),
        coach=CoachClient.from_config(config),
    )
