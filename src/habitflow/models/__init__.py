"""SQLModel table exports."""

from .habit import CompletionRecord, Habit, HabitView, day_key

__all__ = ["CompletionRecord", "Habit", "HabitView", "day_key"]
