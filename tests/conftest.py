"""Pytest configuration and shared fixtures for HabitFlow tests.

Provides an isolated SQLite database per test, a session factory matching the
repository contract, a controllable clock, and small factories for habits.
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitflow.infra.repositories.habit import SQLModelHabitRepository
from habitflow.models import CompletionRecord, Habit  # noqa: F401  # register tables
from habitflow.services.habits import HabitService


class FixedClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep config-created files (database, logs) inside the test's tmp dir."""

    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITFLOW_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITFLOW_THEME", raising=False)
    return tmp_path / "instance"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for arranging rows directly and inspecting what was written."""

    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Factory returning fresh sessions, as the repository expects."""

    def factory() -> Session:
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 15, 9, 30, 0))


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def habit_service(habit_repo, clock) -> HabitService:
    return HabitService(habit_repo, clock=clock)


@pytest.fixture
def habit_factory(habit_repo):
    """Create persisted habits through the repository."""

    def _create(name: str = "Drink water"):
        return habit_repo.create_habit(name)

    return _create
