"""Habit repository protocol."""

from __future__ import annotations

from typing import Callable, ContextManager, Optional, Protocol

from sqlmodel import Session

from ...models.habit import CompletionRecord, DayLike, Habit, HabitView


class HabitRepository(Protocol):
    """Repository for habits and their per-day completion records.

    ``session_factory`` is exposed so a service can run several reads and
    writes inside one transaction.
    """

    session_factory: Callable[[], ContextManager[Session]]

    def list_habits_for_date(self, day: DayLike) -> list[HabitView]:
        """List every habit merged with its completion state for ``day``."""
        ...

    def create_habit(self, name: str) -> HabitView:
        """Create a habit with a zero streak."""
        ...

    def delete_habit(self, habit_id: int) -> bool:
        """Delete a habit and its completion records; False if it did not exist."""
        ...

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def get_record_for_day(self, habit_id: int, day: DayLike) -> Optional[CompletionRecord]:
        """Return the authoritative completion record for a habit on ``day``."""
        ...

    def list_records(self, habit_id: int) -> list[CompletionRecord]:
        """Return all completion records for a habit, oldest first."""
        ...

    def count_records(self, habit_id: Optional[int] = None) -> int:
        """Count completion records, optionally for one habit."""
        ...
