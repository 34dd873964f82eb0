"""Tests for default habit seeding."""

from __future__ import annotations

from wellnest.services.habits import DEFAULT_HABITS, ensure_defaults


class RecordingStore:
    """Minimal store capturing inserted rows."""

    def __init__(self, names=()):
        self.names = list(names)
        self.inserted: list[dict] = []

    def list_habit_names(self, *, user_id):
        return list(self.names)

    def insert_habits(self, rows):
        rows = list(rows)
        self.inserted.extend(rows)
        self.names.extend(row["name"] for row in rows)
        return len(rows)


def test_new_user_gets_all_defaults(habit_store, user):
    inserted = ensure_defaults(habit_store, user_id=user.id)

    assert inserted == [habit.name for habit in DEFAULT_HABITS]
    habits = habit_store.list_habits(user_id=user.id)
    assert [h.name for h in habits] == [habit.name for habit in DEFAULT_HABITS]
    # Column defaults fill in the fields the seeder leaves out.
    assert {h.icon for h in habits} == {"⭐"}
    assert {h.frequency for h in habits} == {"Daily"}
    assert {h.streak for h in habits} == {0}


def test_seeding_is_idempotent(habit_store, user):
    ensure_defaults(habit_store, user_id=user.id)
    assert ensure_defaults(habit_store, user_id=user.id) == []
    assert len(habit_store.list_habits(user_id=user.id)) == len(DEFAULT_HABITS)


def test_only_missing_defaults_inserted(habit_factory, habit_store, user):
    habit_factory(name="Exercise")
    habit_factory(name="Read", category="Learning")

    inserted = ensure_defaults(habit_store, user_id=user.id)

    assert "Exercise" not in inserted
    assert "Read" not in inserted
    assert len(inserted) == len(DEFAULT_HABITS) - 2


def test_custom_habits_do_not_block_seeding(habit_factory, habit_store, user):
    habit_factory(name="Play guitar", category="Other")

    assert len(ensure_defaults(habit_store, user_id=user.id)) == len(DEFAULT_HABITS)


def test_insert_payload_is_minimal():
    store = RecordingStore()
    ensure_defaults(store, user_id=7)

    assert store.inserted
    for row in store.inserted:
        assert set(row) == {"name", "category", "user_id"}
        assert row["user_id"] == 7


def test_defaults_are_per_user(habit_store, user, other_user):
    ensure_defaults(habit_store, user_id=user.id)

    assert habit_store.list_habits(user_id=other_user.id) == []


def test_seeding_works_without_optional_columns(legacy_habit_store, legacy_user):
    inserted = ensure_defaults(legacy_habit_store, user_id=legacy_user.id)

    habits = legacy_habit_store.list_habits(user_id=legacy_user.id)
    assert len(habits) == len(inserted) == len(DEFAULT_HABITS)
    assert all(h.streak is None and h.icon is None for h in habits)
