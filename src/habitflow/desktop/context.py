"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..infra.repositories import SQLModelHabitRepository
from ..services.habits import Clock, HabitService


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    habit_service: HabitService

    theme_mode: ft.ThemeMode = ft.ThemeMode.DARK

    @property
    def dev_mode(self) -> bool:
        return bool(self.config.DEV_MODE)


def create_app_context(
    config: Optional[BaseConfig] = None, *, clock: Optional[Clock] = None
) -> AppContext:
    """Create the engine, schema, repository and service for one app session."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    habit_repo = SQLModelHabitRepository(session_factory)
    habit_service = HabitService(habit_repo, clock=clock)

    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=habit_repo,
        habit_service=habit_service,
        theme_mode=ft.ThemeMode.LIGHT if config.THEME == "light" else ft.ThemeMode.DARK,
    )
