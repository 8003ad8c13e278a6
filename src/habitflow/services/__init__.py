"""Service layer for HabitFlow."""

from .habits import DaySummary, HabitService, summarize

__all__ = ["DaySummary", "HabitService", "summarize"]
