"""History view: inspect and toggle completion for past days."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ..components import build_app_bar, build_empty_state, build_habit_row, build_progress, show_snack
from ..state import DayViewState, HistoryViewState

if TYPE_CHECKING:
    from ..context import AppContext


def build_history_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the history view, starting on yesterday."""

    state = HistoryViewState(ctx.habit_service)
    date_label = ft.Text(size=20, weight=ft.FontWeight.BOLD)
    habit_list = ft.Column(spacing=8)
    progress = ft.Container()
    next_button = ft.IconButton(icon=ft.Icons.CHEVRON_RIGHT, tooltip="Next day")
    prev_button = ft.IconButton(icon=ft.Icons.CHEVRON_LEFT, tooltip="Previous day")

    def render(_state: DayViewState | None = None) -> None:
        date_label.value = state.day.strftime("%A, %B %d, %Y")
        next_button.disabled = state.is_today
        progress.content = build_progress(state.summary)
        habit_list.controls = [
            build_habit_row(habit, on_toggle=_toggle) for habit in state.habits
        ] or [build_empty_state("No habits yet")]
        page.update()

    def _report_failure(action: str) -> None:
        show_snack(page, f"{action} failed: {state.error_message}")

    def _toggle(habit_id: int) -> None:
        if state.toggle(habit_id) is None:
            _report_failure("Update")
            render()

    def _move(step) -> None:
        if not step():
            _report_failure("Loading day")

    prev_button.on_click = lambda _: _move(state.previous_day)
    next_button.on_click = lambda _: _move(state.next_day)

    state.subscribe(render)
    if not state.previous_day():
        render()

    content = ft.Column(
        controls=[
            ft.Row(
                controls=[
                    prev_button,
                    date_label,
                    next_button,
                    ft.TextButton(
                        "Jump to today",
                        on_click=lambda _: _move(lambda: state.go_to(state.service.today())),
                    ),
                ],
                alignment=ft.MainAxisAlignment.START,
            ),
            progress,
            habit_list,
        ],
        spacing=16,
        expand=True,
        scroll=ft.ScrollMode.AUTO,
    )

    return ft.View(
        route="/history",
        appbar=build_app_bar(ctx, "History", page),
        controls=[ft.Container(content=content, padding=16, expand=True)],
        padding=0,
    )
