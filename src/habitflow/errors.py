"""Exception types raised by the habit repository and service."""

from __future__ import annotations


class HabitFlowError(Exception):
    """Base class for application errors surfaced to the user."""


class ValidationError(HabitFlowError):
    """User input was rejected before anything was written."""


class NotFoundError(HabitFlowError):
    """The targeted habit no longer exists."""

    def __init__(self, habit_id: int):
        super().__init__(f"Habit {habit_id} not found")
        self.habit_id = habit_id


class StoreError(HabitFlowError):
    """The database was unavailable or a query failed."""


__all__ = ["HabitFlowError", "NotFoundError", "StoreError", "ValidationError"]
