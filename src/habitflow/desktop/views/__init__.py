"""Flet view builders."""

from .history import build_history_view
from .today import build_today_view

__all__ = ["build_history_view", "build_today_view"]
