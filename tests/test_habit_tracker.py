"""Tests for the habit tracker: board assembly, toggling, adding and deleting."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from wellnest.domain.errors import (
    DuplicateHabitError,
    HabitNotFoundError,
    InvalidHabitError,
    StoreError,
    ToggleInProgressError,
)
from wellnest.infra.repositories import SQLModelHabitStore
from wellnest.services.habits import DEFAULT_HABITS, HabitTracker

TODAY = date(2024, 3, 14)


class Clock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock():
    return Clock(TODAY)


@pytest.fixture
def tracker(habit_store, clock):
    return HabitTracker(habit_store, today_provider=clock)


@pytest.fixture
def legacy_tracker(legacy_habit_store, clock):
    return HabitTracker(legacy_habit_store, today_provider=clock)


def _entry(board, name):
    return next(entry for entry in board.entries if entry.habit.name == name)


class TestBoard:
    def test_first_visit_seeds_defaults(self, tracker, user):
        board = tracker.ensure_defaults_and_fetch(user.id)

        assert [e.habit.name for e in board.entries] == [h.name for h in DEFAULT_HABITS]
        assert board.streaks_enabled is True
        assert board.completed_count == 0
        assert board.total_streak == 0
        assert board.errors == []

    def test_board_without_habits_disables_streaks(self, tracker, user):
        board = tracker.fetch(user.id)

        assert board.entries == []
        assert board.streaks_enabled is False
        assert board.progress_percent == 0

    def test_legacy_table_disables_streaks(self, legacy_tracker, legacy_user):
        board = legacy_tracker.ensure_defaults_and_fetch(legacy_user.id)

        assert len(board.entries) == len(DEFAULT_HABITS)
        assert board.streaks_enabled is False
        assert not any(entry.show_streak_badge for entry in board.entries)

    def test_seed_failure_is_reported_and_fetch_continues(self, session_factory, user, clock):
        class BrokenSeedStore(SQLModelHabitStore):
            def insert_habits(self, rows):
                raise StoreError("Could not save habits.")

        tracker = HabitTracker(BrokenSeedStore(session_factory), today_provider=clock)
        board = tracker.ensure_defaults_and_fetch(user.id)

        assert board.entries == []
        assert board.errors == ["Error ensuring default habits: Could not save habits."]

    def test_to_dict(self, tracker, user):
        payload = tracker.ensure_defaults_and_fetch(user.id).to_dict()

        assert payload["today"] == TODAY.isoformat()
        assert payload["total"] == len(DEFAULT_HABITS)
        assert payload["habits"][0]["icon"] == "⭐"
        assert payload["habits"][0]["completed"] is False


class TestToggle:
    def test_complete_then_uncomplete(self, tracker, habit_store, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = _entry(board, "Exercise").habit.id

        board = tracker.toggle(user.id, habit_id)
        entry = _entry(board, "Exercise")
        assert entry.completed is True
        assert entry.streak == 1
        assert entry.show_streak_badge is True
        assert board.completed_count == 1

        board = tracker.toggle(user.id, habit_id)
        entry = _entry(board, "Exercise")
        assert entry.completed is False
        assert entry.streak == 0
        assert habit_store.has_completion(habit_id, TODAY) is False

    def test_consecutive_days_extend_streak(self, tracker, clock, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = _entry(board, "Read").habit.id

        for offset in range(3):
            clock.today = TODAY + timedelta(days=offset)
            board = tracker.toggle(user.id, habit_id)

        assert _entry(board, "Read").streak == 3
        assert board.total_streak == 3

    def test_existing_streak_continues_then_resets(self, tracker, habit_store, clock, user):
        tracker.ensure_defaults_and_fetch(user.id)
        habit = habit_store.find_habit_by_name("Exercise", user_id=user.id)
        for day in (date(2024, 1, 9), date(2024, 1, 10)):
            habit_store.insert_completion(habit_id=habit.id, user_id=user.id, day=day)
        habit_store.update_streak(habit.id, 2)

        clock.today = date(2024, 1, 11)
        board = tracker.toggle(user.id, habit.id)
        entry = _entry(board, "Exercise")
        assert (entry.completed, entry.streak) == (True, 3)

        board = tracker.toggle(user.id, habit.id)
        entry = _entry(board, "Exercise")
        assert (entry.completed, entry.streak) == (False, 0)

    def test_skipped_day_restarts_streak(self, tracker, clock, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = _entry(board, "Read").habit.id

        tracker.toggle(user.id, habit_id)
        clock.today = TODAY + timedelta(days=2)
        board = tracker.toggle(user.id, habit_id)

        assert _entry(board, "Read").streak == 1

    def test_state_comes_from_store_not_caller(self, tracker, habit_store, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit = _entry(board, "Hydrate").habit
        # Completed elsewhere after the board was fetched.
        habit_store.insert_completion(habit_id=habit.id, user_id=user.id, day=TODAY)

        board = tracker.toggle(user.id, habit.id)

        assert _entry(board, "Hydrate").completed is False

    def test_toggle_without_streak_column(self, legacy_tracker, legacy_habit_store, legacy_user):
        board = legacy_tracker.ensure_defaults_and_fetch(legacy_user.id)
        habit_id = board.entries[0].habit.id

        board = legacy_tracker.toggle(legacy_user.id, habit_id)

        assert board.entries[0].completed is True
        assert board.entries[0].habit.streak is None
        assert legacy_habit_store.has_completion(habit_id, TODAY) is True

    def test_unknown_habit(self, tracker, user):
        tracker.ensure_defaults_and_fetch(user.id)
        with pytest.raises(HabitNotFoundError):
            tracker.toggle(user.id, 9999)

    def test_other_users_habit_is_not_found(self, tracker, user, other_user):
        board = tracker.ensure_defaults_and_fetch(other_user.id)
        with pytest.raises(HabitNotFoundError):
            tracker.toggle(user.id, board.entries[0].habit.id)

    def test_second_toggle_while_saving_is_rejected(self, tracker, habit_store, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = board.entries[0].habit.id

        with tracker._saving(habit_id):
            with pytest.raises(ToggleInProgressError):
                tracker.toggle(user.id, habit_id)

        assert habit_store.has_completion(habit_id, TODAY) is False
        # Guard is released afterwards.
        assert tracker.toggle(user.id, habit_id).entries[0].completed is True

    def test_guard_released_after_failure(self, tracker, user):
        with pytest.raises(HabitNotFoundError):
            tracker.toggle(user.id, 42)
        assert tracker._in_flight == set()

    def test_streak_write_failure_keeps_completion(self, session_factory, user, clock):
        class BrokenStreakStore(SQLModelHabitStore):
            def update_streak(self, habit_id, streak):
                raise StoreError("Could not update streak.")

        store = BrokenStreakStore(session_factory)
        tracker = HabitTracker(store, today_provider=clock)
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = board.entries[0].habit.id

        with pytest.raises(StoreError):
            tracker.toggle(user.id, habit_id)

        assert store.has_completion(habit_id, TODAY) is True
        assert store.get_habit(habit_id, user_id=user.id).streak == 0


class TestAddAndDelete:
    def test_add_habit(self, tracker, user):
        board = tracker.add_habit(
            user.id, {"name": "  Stretch  ", "category": "Fitness", "icon": "💪", "frequency": "Weekly"}
        )

        entry = _entry(board, "Stretch")
        assert entry.habit.category == "Fitness"
        assert entry.habit.icon == "💪"
        assert entry.habit.frequency == "Weekly"
        assert entry.habit.streak == 0

    def test_duplicate_name_rejected(self, tracker, user):
        tracker.add_habit(user.id, {"name": "Stretch"})
        with pytest.raises(DuplicateHabitError, match="A habit with this name already exists"):
            tracker.add_habit(user.id, {"name": "Stretch"})

    def test_same_name_allowed_for_other_user(self, tracker, user, other_user):
        tracker.add_habit(user.id, {"name": "Stretch"})
        board = tracker.add_habit(other_user.id, {"name": "Stretch"})
        assert [e.habit.name for e in board.entries] == ["Stretch"]

    def test_blank_name_rejected(self, tracker, user):
        with pytest.raises(InvalidHabitError, match="Please provide a habit name.") as excinfo:
            tracker.add_habit(user.id, {"name": "   "})
        assert excinfo.value.status_code == 400

    def test_add_on_legacy_table_drops_missing_columns(self, legacy_tracker, legacy_user):
        board = legacy_tracker.add_habit(legacy_user.id, {"name": "Stretch", "icon": "💪"})

        entry = _entry(board, "Stretch")
        assert entry.habit.icon is None
        assert entry.habit.streak is None

    def test_delete_removes_habit_and_completions(self, tracker, habit_store, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        habit_id = board.entries[0].habit.id
        tracker.toggle(user.id, habit_id)

        board = tracker.delete_habit(user.id, habit_id)

        assert habit_id not in {e.habit.id for e in board.entries}
        assert habit_store.has_completion(habit_id, TODAY) is False

    def test_delete_unknown(self, tracker, user):
        with pytest.raises(HabitNotFoundError):
            tracker.delete_habit(user.id, 12345)

    def test_deleted_default_returns_on_next_visit(self, tracker, user):
        board = tracker.ensure_defaults_and_fetch(user.id)
        tracker.delete_habit(user.id, _entry(board, "Journaling").habit.id)

        board = tracker.ensure_defaults_and_fetch(user.id)

        assert "Journaling" in {e.habit.name for e in board.entries}
