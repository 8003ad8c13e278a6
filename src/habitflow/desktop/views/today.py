"""Today view: add, toggle and delete habits for the current day."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...errors import ValidationError
from ..components import (
    build_app_bar,
    build_empty_state,
    build_habit_row,
    build_progress,
    show_snack,
)
from ..state import DayViewState

if TYPE_CHECKING:
    from ..context import AppContext


def build_today_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the today view."""

    state = DayViewState(ctx.habit_service)
    date_label = ft.Text(size=20, weight=ft.FontWeight.BOLD)
    habit_list = ft.Column(spacing=8)
    progress = ft.Container()
    name_field = ft.TextField(
        label="New habit",
        hint_text="e.g., Drink water",
        max_length=100,
        expand=True,
    )

    def render(_state: DayViewState | None = None) -> None:
        date_label.value = state.day.strftime("%A, %B %d, %Y")
        progress.content = build_progress(state.summary)
        habit_list.controls = [
            build_habit_row(habit, on_toggle=_toggle, on_delete=_delete) for habit in state.habits
        ] or [build_empty_state("Create your first habit to start tracking")]
        page.update()

    def _report_failure(action: str) -> None:
        show_snack(page, f"{action} failed: {state.error_message}")

    def _toggle(habit_id: int) -> None:
        if state.toggle(habit_id) is None:
            _report_failure("Update")
            # Re-render so the checkbox snaps back to the stored value.
            render()

    def _delete(habit_id: int) -> None:
        if state.delete(habit_id):
            show_snack(page, "Habit deleted")
        else:
            _report_failure("Delete")

    def _add(_e=None) -> None:
        created = state.add_habit(name_field.value or "")
        if created is None:
            if isinstance(state.last_error, ValidationError):
                name_field.error_text = state.error_message
                page.update()
            else:
                _report_failure("Create")
            return
        name_field.value = ""
        name_field.error_text = None
        show_snack(page, f"Added {created.name}")

    name_field.on_submit = _add
    state.subscribe(render)
    if not state.refresh():
        render()

    content = ft.Column(
        controls=[
            date_label,
            progress,
            ft.Row(
                controls=[
                    name_field,
                    ft.FilledButton("Add habit", icon=ft.Icons.ADD, on_click=_add),
                ],
            ),
            habit_list,
        ],
        spacing=16,
        expand=True,
        scroll=ft.ScrollMode.AUTO,
    )

    return ft.View(
        route="/today",
        appbar=build_app_bar(ctx, "Today", page),
        controls=[ft.Container(content=content, padding=16, expand=True)],
        padding=0,
    )
