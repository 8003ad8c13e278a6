"""View state for the today and history screens.

State objects hold the selected day and the habits shown for it. They only
change after the service confirms a write, then re-read from the store and
notify subscribers so the Flet views can re-render.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional, TypeVar

from ..errors import HabitFlowError, NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.habit import HabitView
from ..services.habits import DaySummary, HabitService, summarize

logger = get_logger(__name__)

T = TypeVar("T")
Listener = Callable[["DayViewState"], None]


class DayViewState:
    """Habits and completion for a single day, with derived aggregates."""

    def __init__(self, service: HabitService, day: Optional[date] = None):
        self.service = service
        self._day: Optional[date] = day
        self.habits: list[HabitView] = []
        self.last_error: Optional[HabitFlowError] = None
        self._listeners: list[Listener] = []

    @property
    def day(self) -> date:
        """The pinned day, or the service's current day when none is pinned."""
        return self._day or self.service.today()

    @day.setter
    def day(self, value: date) -> None:
        self._day = value

    @property
    def summary(self) -> DaySummary:
        return summarize(self.habits)

    @property
    def error_message(self) -> Optional[str]:
        return str(self.last_error) if self.last_error else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change callback; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _attempt(self, action: str, operation: Callable[[], T]) -> Optional[T]:
        """Run a service call, recording the error instead of raising."""
        try:
            result = operation()
        except HabitFlowError as exc:
            self.last_error = exc
            if isinstance(exc, ValidationError):
                logger.info(f"{action} rejected: {exc}")
            else:
                logger.warning(f"{action} failed: {exc}", extra={"day": self.day.isoformat()})
            self._notify()
            return None
        self.last_error = None
        return result

    def refresh(self) -> bool:
        """Re-read habits for the current day from the store."""
        habits = self._attempt("Load habits", lambda: self.service.list_habits_for_date(self.day))
        if habits is None:
            return False
        self.habits = habits
        self._notify()
        return True

    def add_habit(self, name: str) -> Optional[HabitView]:
        created = self._attempt("Create habit", lambda: self.service.create_habit(name))
        if created is not None:
            self.refresh()
        return created

    def toggle(self, habit_id: int) -> Optional[HabitView]:
        """Toggle completion for the current day; state is untouched on failure."""
        day = self.day
        updated = self._attempt(
            "Toggle habit", lambda: self.service.toggle_completion(habit_id, day)
        )
        if updated is not None:
            self.refresh()
        return updated

    def delete(self, habit_id: int) -> bool:
        """Delete a habit; a habit that is already gone counts as success."""
        removed = self._attempt("Delete habit", lambda: self.service.delete_habit(habit_id))
        if removed is None:
            return False
        self.refresh()
        return True

    @property
    def not_found(self) -> bool:
        return isinstance(self.last_error, NotFoundError)


class HistoryViewState(DayViewState):
    """Day state that can move between past dates, never beyond today."""

    def go_to(self, day: date) -> bool:
        """Select ``day`` (clamped to today) and load its habits."""
        target = min(day, self.service.today())
        habits = self._attempt("Load habits", lambda: self.service.list_habits_for_date(target))
        if habits is None:
            return False
        self.day = target
        self.habits = habits
        self._notify()
        return True

    def previous_day(self) -> bool:
        return self.go_to(self.day - timedelta(days=1))

    def next_day(self) -> bool:
        return self.go_to(self.day + timedelta(days=1))

    @property
    def is_today(self) -> bool:
        return self.day >= self.service.today()


__all__ = ["DayViewState", "HistoryViewState"]
