"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, func, select

from ...errors import StoreError, ValidationError
from ...logging_config import get_logger
from ...models.habit import CompletionRecord, DayLike, Habit, HabitView, day_key

logger = get_logger(__name__)

MAX_NAME_LENGTH = 100


@contextmanager
def store_errors(action: str, **context) -> Iterator[None]:
    """Translate SQLAlchemy failures into ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Store failure while trying to {action}", exc_info=True, extra=context)
        raise StoreError(f"Could not {action}: {exc}") from exc


def find_record_for_day(session: Session, habit_id: int, day: DayLike) -> Optional[CompletionRecord]:
    """Return the authoritative record for ``habit_id`` on ``day``.

    Records are matched by the textual ``YYYY-MM-DD`` prefix of their stored
    timestamp. When several match, the oldest one (lowest id) wins.
    """
    statement = (
        select(CompletionRecord)
        .where(CompletionRecord.habit_id == habit_id)
        .where(col(CompletionRecord.date).startswith(day_key(day)))
        .order_by(col(CompletionRecord.id))
    )
    return session.exec(statement).first()


def normalize_name(name: str | None) -> str:
    """Return the trimmed habit name or raise ``ValidationError``."""

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Habit name is required")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Habit name must be {MAX_NAME_LENGTH} characters or less")
    return cleaned


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_habits_for_date(self, day: DayLike) -> list[HabitView]:
        """List all habits in insertion order with their completion state for ``day``."""
        prefix = day_key(day)
        with store_errors("list habits", day=prefix):
            with self.session_factory() as session:
                habits = session.exec(select(Habit).order_by(col(Habit.id))).all()
                records = session.exec(
                    select(CompletionRecord)
                    .where(col(CompletionRecord.date).startswith(prefix))
                    .order_by(col(CompletionRecord.id))
                ).all()

                completed_by_habit: dict[int, bool] = {}
                for record in records:
                    completed_by_habit.setdefault(record.habit_id, bool(record.completed))

                return [
                    HabitView.from_habit(habit, completed_by_habit.get(habit.id, False))
                    for habit in habits
                ]

    def create_habit(self, name: str) -> HabitView:
        """Create a new habit with a zero streak."""
        cleaned = normalize_name(name)
        with store_errors("create habit", habit_name=cleaned):
            with self.session_factory() as session:
                habit = Habit(name=cleaned, streak=0)
                session.add(habit)
                session.commit()
                session.refresh(habit)
                view = HabitView.from_habit(habit, completed=False)
        logger.info("Habit created", extra={"habit_id": view.id, "habit_name": view.name})
        return view

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit and every completion record it owns.

        Returns False when the habit did not exist.
        """
        with store_errors("delete habit", habit_id=habit_id):
            with self.session_factory() as session:
                habit = session.get(Habit, habit_id)
                if habit is None:
                    logger.debug("Delete skipped, habit missing", extra={"habit_id": habit_id})
                    return False
                records = session.exec(
                    select(CompletionRecord).where(CompletionRecord.habit_id == habit_id)
                ).all()
                for record in records:
                    session.delete(record)
                session.flush()
                session.delete(habit)
                session.commit()
        logger.info(
            "Habit deleted",
            extra={"habit_id": habit_id, "records_removed": len(records)},
        )
        return True

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with store_errors("load habit", habit_id=habit_id):
            with self.session_factory() as session:
                habit = session.get(Habit, habit_id)
                if habit:
                    session.expunge(habit)
                return habit

    def get_record_for_day(self, habit_id: int, day: DayLike) -> Optional[CompletionRecord]:
        """Return the authoritative completion record for a habit on ``day``."""
        with store_errors("load completion record", habit_id=habit_id):
            with self.session_factory() as session:
                record = find_record_for_day(session, habit_id, day)
                if record:
                    session.expunge(record)
                return record

    def list_records(self, habit_id: int) -> list[CompletionRecord]:
        """Return all completion records for a habit, oldest first."""
        with store_errors("list completion records", habit_id=habit_id):
            with self.session_factory() as session:
                rows = list(
                    session.exec(
                        select(CompletionRecord)
                        .where(CompletionRecord.habit_id == habit_id)
                        .order_by(col(CompletionRecord.id))
                    ).all()
                )
                session.expunge_all()
                return rows

    def count_records(self, habit_id: Optional[int] = None) -> int:
        """Count completion records, optionally restricted to one habit."""
        with store_errors("count completion records", habit_id=habit_id):
            with self.session_factory() as session:
                statement = select(func.count()).select_from(CompletionRecord)
                if habit_id is not None:
                    statement = statement.where(CompletionRecord.habit_id == habit_id)
                return int(session.exec(statement).one())
