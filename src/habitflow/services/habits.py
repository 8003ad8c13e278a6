"""Habit service: completion toggling, streak bookkeeping and day summaries."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..domain.repositories import HabitRepository
from ..errors import NotFoundError
from ..infra.repositories.habit import find_record_for_day, store_errors
from ..logging_config import get_logger
from ..models.habit import CompletionRecord, DayLike, Habit, HabitView, day_key

logger = get_logger(__name__)

Clock = Callable[[], datetime]

# Lower bounds (percent) for the progress levels shown in the UI.
LEVEL_THRESHOLDS = (("high", 80), ("medium", 40), ("low", 0))


def next_streak(streak: int, completed: bool) -> int:
    """Return the streak after a toggle: +1 when completed, -1 floored at zero otherwise."""

    if completed:
        return streak + 1
    return max(streak - 1, 0)


def write_timestamp(day: DayLike, now: datetime) -> str:
    """Stamp a write on ``day`` with the wall-clock time from ``now``."""

    calendar_day = date.fromisoformat(day_key(day))
    return datetime.combine(calendar_day, now.time()).isoformat(timespec="milliseconds")


@dataclass(frozen=True)
class DaySummary:
    """Aggregates derived from the habits shown for one day."""

    total: int
    completed: int
    percent: int
    level: str

    @property
    def remaining(self) -> int:
        return self.total - self.completed


def summarize(views: Iterable[HabitView]) -> DaySummary:
    """Compute completed count, percent complete and progress level."""

    items = list(views)
    total = len(items)
    completed = sum(1 for view in items if view.completed)
    percent = round(completed * 100 / total) if total else 0
    level = next(name for name, floor in LEVEL_THRESHOLDS if percent >= floor)
    return DaySummary(total=total, completed=completed, percent=percent, level=level)


class HabitService:
    """Front door for habit operations used by the desktop views.

    Toggling runs the record lookup, record write and streak write inside
    one session so the two tables never disagree.
    """

    def __init__(self, repository: HabitRepository, *, clock: Optional[Clock] = None):
        self.repository = repository
        self.clock: Clock = clock or datetime.now
        self._lock = threading.Lock()

    def today(self) -> date:
        return self.clock().date()

    def list_habits_for_date(self, day: Optional[DayLike] = None) -> list[HabitView]:
        return self.repository.list_habits_for_date(day if day is not None else self.today())

    def create_habit(self, name: str) -> HabitView:
        return self.repository.create_habit(name)

    def delete_habit(self, habit_id: int) -> bool:
        return self.repository.delete_habit(habit_id)

    def toggle_completion(self, habit_id: int, day: Optional[DayLike] = None) -> HabitView:
        """Flip completion of ``habit_id`` on ``day`` and adjust its streak.

        Raises:
            NotFoundError: the habit does not exist; nothing is written.
            StoreError: the database failed; the transaction is rolled back.
        """
        prefix = day_key(day if day is not None else self.today())
        with self._lock:
            with store_errors("toggle completion", habit_id=habit_id, day=prefix):
                with self.repository.session_factory() as session:
                    habit = session.get(Habit, habit_id)
                    if habit is None:
                        raise NotFoundError(habit_id)

                    stamp = write_timestamp(prefix, self.clock())
                    record = find_record_for_day(session, habit_id, prefix)
                    if record is None:
                        record = CompletionRecord(habit_id=habit_id, completed=True, date=stamp)
                    else:
                        record.completed = not record.completed
                        record.date = stamp
                    session.add(record)

                    previous = habit.streak
                    habit.streak = next_streak(previous, record.completed)
                    session.add(habit)
                    view = HabitView.from_habit(habit, completed=bool(record.completed))
                    session.commit()

        logger.info(
            "Habit toggled",
            extra={
                "habit_id": habit_id,
                "day": prefix,
                "completed": view.completed,
                "streak_before": previous,
                "streak_after": view.streak,
            },
        )
        return view


__all__ = [
    "DaySummary",
    "HabitService",
    "LEVEL_THRESHOLDS",
    "next_streak",
    "summarize",
    "write_timestamp",
]
