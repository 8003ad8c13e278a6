"""Habit tracking data structures."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..errors import StoreError

DayLike = Union[dt.date, dt.datetime, str]


def day_key(day: DayLike) -> str:
    """Return the ``YYYY-MM-DD`` prefix that identifies a calendar day."""

    if isinstance(day, str):
        # Validates the format and drops any time portion.
        return dt.date.fromisoformat(day[:10]).isoformat()
    if isinstance(day, dt.datetime):
        return day.date().isoformat()
    return day.isoformat()


class Habit(SQLModel, table=True):
    """A user-defined habit and its cumulative streak counter."""

    __tablename__: ClassVar[str] = "habits"
    __table_args__ = (
        CheckConstraint("streak >= 0", name="ck_habits_streak_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    streak: int = Field(default=0, nullable=False)


class CompletionRecord(SQLModel, table=True):
    """Per-day completion log entry for a habit.

    ``date`` holds the ISO timestamp of the last write; the first ten
    characters are the calendar day the record belongs to.
    """

    __tablename__: ClassVar[str] = "master"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habits.id", nullable=False, index=True, ondelete="CASCADE")
    completed: bool = Field(default=False, nullable=False)
    completed_repeats: int = Field(default=0, nullable=False)
    date: Optional[str] = Field(default=None, index=True)


@dataclass(frozen=True)
class HabitView:
    """A habit merged with its completion state for one calendar day."""

    id: int
    name: str
    streak: int
    completed: bool

    @classmethod
    def from_habit(cls, habit: Habit, completed: bool) -> "HabitView":
        if habit.id is None:
            raise StoreError(f"Habit {habit.name!r} has not been saved")
        return cls(id=habit.id, name=habit.name, streak=habit.streak, completed=completed)


__all__ = ["CompletionRecord", "DayLike", "Habit", "HabitView", "day_key"]
