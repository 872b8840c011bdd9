"""Engine, schema and transaction helpers for the habit/todo store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..models import Habit, Todo

SessionFactory = Callable[[], ContextManager[Session]]


def _apply_sqlite_pragmas(engine: Engine, pragmas: dict[str, str]) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            for name, value in pragmas.items():
                cursor.execute(f"PRAGMA {name}={value}")
        finally:
            cursor.close()


def create_db_engine(config: BaseConfig) -> Engine:
    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    if engine.dialect.name == "sqlite" and config.SQLITE_PRAGMAS:
        _apply_sqlite_pragmas(engine, config.SQLITE_PRAGMAS)
    return engine


def init_database(engine: Engine) -> None:
    """Create the habit and todo tables if they are missing."""

    SQLModel.metadata.create_all(engine, tables=[Habit.__table__, Todo.__table__])


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error.

    Objects stay usable after commit so repositories can hand them to callers.
    """

    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_session_factory(engine: Engine) -> SessionFactory:
    return lambda: session_scope(engine)


__all__ = ["SessionFactory", "create_db_engine", "create_session_factory", "init_database", "session_scope"]
