"""Tests for the today/history view state objects."""

from __future__ import annotations

from datetime import date

from habitflow.desktop.state import DayViewState, HistoryViewState
from habitflow.errors import StoreError, ValidationError

TODAY = date(2024, 3, 15)


class Recorder:
    def __init__(self):
        self.calls = 0

    def __call__(self, _state):
        self.calls += 1


class TestDayViewState:
    def test_defaults_to_service_today(self, habit_service):
        state = DayViewState(habit_service)
        assert state.day == TODAY

    def test_refresh_loads_habits_and_summary(self, habit_service, habit_factory):
        habit_factory("Drink water")
        habit_factory("Walk")
        state = DayViewState(habit_service)

        assert state.refresh() is True
        assert [h.name for h in state.habits] == ["Drink water", "Walk"]
        assert state.summary.percent == 0

    def test_add_habit_rereads_store(self, habit_service):
        state = DayViewState(habit_service)
        listener = Recorder()
        state.subscribe(listener)

        created = state.add_habit("Drink water")

        assert created is not None
        assert [h.name for h in state.habits] == ["Drink water"]
        assert listener.calls == 1

    def test_blank_name_is_rejected(self, habit_service):
        state = DayViewState(habit_service)
        state.refresh()

        assert state.add_habit("   ") is None
        assert isinstance(state.last_error, ValidationError)
        assert state.habits == []

    def test_toggle_updates_after_write(self, habit_service, habit_factory):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()

        updated = state.toggle(water.id)

        assert updated.completed is True
        assert state.habits[0].completed is True
        assert state.habits[0].streak == 1
        assert state.summary.percent == 100
        assert state.last_error is None

    def test_toggle_missing_habit_leaves_state(self, habit_service, habit_factory):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()
        habits_before = state.habits

        habit_service.delete_habit(water.id)
        assert state.toggle(water.id) is None

        assert state.not_found
        assert state.habits is habits_before

    def test_store_failure_does_not_mutate(self, habit_service, habit_factory, monkeypatch):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()
        habits_before = state.habits

        def _fail(*_args, **_kwargs):
            raise StoreError("database is locked")

        monkeypatch.setattr(habit_service, "toggle_completion", _fail)

        assert state.toggle(water.id) is None
        assert state.habits is habits_before
        assert state.habits[0].completed is False
        assert state.error_message == "database is locked"

    def test_delete_missing_habit_is_silent(self, habit_service, habit_factory):
        habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()

        assert state.delete(9999) is True
        assert state.last_error is None
        assert len(state.habits) == 1

    def test_delete_removes_from_list(self, habit_service, habit_factory):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()

        assert state.delete(water.id) is True
        assert state.habits == []

    def test_toggle_after_midnight_writes_new_day(
        self, habit_service, habit_factory, habit_repo, clock
    ):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.refresh()

        clock.advance(days=1)
        updated = state.toggle(water.id)

        assert state.day == date(2024, 3, 16)
        assert updated.completed is True
        assert habit_repo.get_record_for_day(water.id, date(2024, 3, 16)) is not None
        assert habit_repo.get_record_for_day(water.id, TODAY) is None
        assert state.habits[0].completed is True

    def test_refresh_after_midnight_reads_new_day(self, habit_service, habit_factory, clock):
        water = habit_factory("Drink water")
        state = DayViewState(habit_service)
        state.toggle(water.id)
        assert state.habits[0].completed is True

        clock.advance(days=1)
        state.refresh()

        assert state.day == date(2024, 3, 16)
        assert state.habits[0].completed is False
        assert state.habits[0].streak == 1

    def test_pinned_day_ignores_clock(self, habit_service, clock):
        state = DayViewState(habit_service, day=date(2024, 3, 1))
        clock.advance(days=1)
        assert state.day == date(2024, 3, 1)

    def test_unsubscribe_stops_notifications(self, habit_service):
        state = DayViewState(habit_service)
        listener = Recorder()
        unsubscribe = state.subscribe(listener)
        unsubscribe()

        state.refresh()
        assert listener.calls == 0


class TestHistoryViewState:
    def test_moves_back_and_forward(self, habit_service, habit_factory):
        habit_factory("Drink water")
        state = HistoryViewState(habit_service)

        assert state.previous_day() is True
        assert state.day == date(2024, 3, 14)
        assert not state.is_today

        assert state.next_day() is True
        assert state.day == TODAY
        assert state.is_today

    def test_cannot_move_past_today(self, habit_service):
        state = HistoryViewState(habit_service)
        state.next_day()
        assert state.day == TODAY

        state.go_to(date(2030, 1, 1))
        assert state.day == TODAY

    def test_toggle_past_day_is_independent(self, habit_service, habit_factory):
        water = habit_factory("Drink water")
        history = HistoryViewState(habit_service)
        history.go_to(date(2024, 3, 10))

        history.toggle(water.id)

        assert history.habits[0].completed is True
        today = DayViewState(habit_service)
        today.refresh()
        assert today.habits[0].completed is False
        assert today.habits[0].streak == 1

    def test_selected_day_stays_after_midnight(self, habit_service, clock):
        state = HistoryViewState(habit_service)
        state.previous_day()

        clock.advance(days=1)

        assert state.day == date(2024, 3, 14)
        assert not state.is_today

    def test_failed_load_keeps_day(self, habit_service, monkeypatch):
        state = HistoryViewState(habit_service)
        state.refresh()

        def _fail(*_args, **_kwargs):
            raise StoreError("unable to open database file")

        monkeypatch.setattr(habit_service, "list_habits_for_date", _fail)

        assert state.previous_day() is False
        assert state.day == TODAY
