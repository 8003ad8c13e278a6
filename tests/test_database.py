"""Engine bootstrap, schema shape and session factory behaviour."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text
from sqlmodel import select

from habitflow.config import BaseConfig, TestConfig
from habitflow.infra.database import bootstrap_database
from habitflow.models.habit import CompletionRecord, Habit


@pytest.fixture
def memory_db():
    engine, factory = bootstrap_database(TestConfig())
    yield engine, factory
    engine.dispose()


def test_schema_tables_and_columns(memory_db):
    engine, _ = memory_db
    inspector = inspect(engine)

    assert {"habits", "master"} <= set(inspector.get_table_names())
    habit_cols = {c["name"] for c in inspector.get_columns("habits")}
    master_cols = {c["name"] for c in inspector.get_columns("master")}
    assert habit_cols == {"id", "name", "streak"}
    assert master_cols == {"id", "habit_id", "completed", "completed_repeats", "date"}


def test_foreign_keys_pragma_enabled(memory_db):
    engine, _ = memory_db
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_factory_commits_on_success(memory_db):
    _, factory = memory_db
    with factory() as session:
        session.add(Habit(name="Drink water"))

    with factory() as session:
        assert [h.name for h in session.exec(select(Habit)).all()] == ["Drink water"]


def test_factory_rolls_back_on_error(memory_db):
    _, factory = memory_db
    with pytest.raises(RuntimeError):
        with factory() as session:
            session.add(Habit(name="Drink water"))
            session.flush()
            raise RuntimeError("boom")

    with factory() as session:
        assert session.exec(select(Habit)).all() == []


def test_store_cascades_record_delete(memory_db):
    _, factory = memory_db
    with factory() as session:
        habit = Habit(name="Drink water")
        session.add(habit)
        session.flush()
        session.add(CompletionRecord(habit_id=habit.id, completed=True, date="2024-03-15T10:00:00.000"))

    with factory() as session:
        session.connection().execute(text("DELETE FROM habits"))

    with factory() as session:
        assert session.exec(select(CompletionRecord)).all() == []


def test_negative_streak_rejected_by_store(memory_db):
    from sqlalchemy.exc import IntegrityError

    _, factory = memory_db
    with pytest.raises(IntegrityError):
        with factory() as session:
            session.add(Habit(name="Drink water", streak=-1))


def test_file_database_created_in_data_dir(isolated_data_dir):
    engine, _ = bootstrap_database(BaseConfig())
    try:
        assert (isolated_data_dir / "habitflow.db").exists()
    finally:
        engine.dispose()
