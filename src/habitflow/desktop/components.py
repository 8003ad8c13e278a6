"""Reusable controls shared by the today and history views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ..models.habit import HabitView
from ..services.habits import DaySummary

if TYPE_CHECKING:
    from .context import AppContext

LEVEL_COLORS = {
    "low": ft.Colors.RED_400,
    "medium": ft.Colors.AMBER_600,
    "high": ft.Colors.GREEN_600,
}


def show_snack(page: ft.Page, message: str) -> None:
    """Flash a short notice at the bottom of the window."""
    page.open(ft.SnackBar(content=ft.Text(message)))


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """App bar with navigation between the today and history screens."""

    def _toggle_theme(_e):
        ctx.theme_mode = (
            ft.ThemeMode.LIGHT if ctx.theme_mode == ft.ThemeMode.DARK else ft.ThemeMode.DARK
        )
        page.theme_mode = ctx.theme_mode
        page.update()

    return ft.AppBar(
        title=ft.Text(title),
        actions=[
            ft.IconButton(
                icon=ft.Icons.TODAY,
                tooltip="Today",
                on_click=lambda _: page.go("/today"),
            ),
            ft.IconButton(
                icon=ft.Icons.HISTORY,
                tooltip="History",
                on_click=lambda _: page.go("/history"),
            ),
            ft.IconButton(
                icon=ft.Icons.BRIGHTNESS_6,
                tooltip="Toggle theme",
                on_click=_toggle_theme,
            ),
        ],
    )


def build_progress(summary: DaySummary) -> ft.Column:
    """Progress bar plus "x of y done" caption."""
    return ft.Column(
        controls=[
            ft.Text(
                f"{summary.completed} of {summary.total} done ({summary.percent}%)",
                weight=ft.FontWeight.BOLD,
            ),
            ft.ProgressBar(
                value=summary.percent / 100,
                color=LEVEL_COLORS[summary.level],
                bar_height=8,
            ),
        ],
        spacing=6,
    )


def build_habit_row(
    habit: HabitView,
    on_toggle: Callable[[int], None],
    on_delete: Optional[Callable[[int], None]] = None,
) -> ft.Control:
    controls: list[ft.Control] = [
        ft.Checkbox(
            value=habit.completed,
            on_change=lambda _e, hid=habit.id: on_toggle(hid),
        ),
        ft.Column(
            controls=[
                ft.Text(habit.name, size=16, weight=ft.FontWeight.BOLD),
                ft.Text(f"Streak: {habit.streak}", size=12, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            spacing=2,
            expand=True,
        ),
    ]
    if on_delete is not None:
        controls.append(
            ft.IconButton(
                icon=ft.Icons.DELETE_OUTLINE,
                tooltip="Delete habit",
                on_click=lambda _e, hid=habit.id: on_delete(hid),
            )
        )
    return ft.Card(
        content=ft.Container(
            content=ft.Row(controls=controls, alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            padding=12,
        )
    )


def build_empty_state(message: str) -> ft.Control:
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Icon(ft.Icons.CHECK_CIRCLE_OUTLINE, size=64, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=24,
    )
