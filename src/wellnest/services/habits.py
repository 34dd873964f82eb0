"""Habit completion state, streaks and default-habit seeding.

Everything here works against a ``HabitStore``; nothing is cached between
calls. Each mutation is followed by a full re-fetch so the store stays the
single source of truth.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from ..domain.errors import (
    DuplicateHabitError,
    HabitNotFoundError,
    InvalidHabitError,
    StoreError,
    ToggleInProgressError,
)
from ..domain.records import DEFAULT_FREQUENCY, DEFAULT_ICON, HabitRecord
from ..domain.repositories.habit import HabitStore
from ..logging_config import get_logger
from .dates import local_today

logger = get_logger(__name__)

STREAK_LOOKBACK = 30

CATEGORY_OPTIONS = (
    "Health",
    "Mindfulness",
    "Learning",
    "Fitness",
    "Productivity",
    "Reflection",
    "Other",
)
ICON_OPTIONS = ("⭐", "🎯", "💪", "🧘", "📚", "💧", "🏃", "📝", "🎨", "🌱", "🧠", "❤️")


@dataclass(frozen=True)
class DefaultHabit:
    """Starter habit created for every user."""

    name: str
    category: str
    icon: str
    frequency: str = DEFAULT_FREQUENCY

    def insert_payload(self, user_id: int) -> dict[str, Any]:
        # icon/frequency/streak are left to column defaults; the table may lack them.
        return {"name": self.name, "category": self.category, "user_id": user_id}


DEFAULT_HABITS: tuple[DefaultHabit, ...] = (
    DefaultHabit("Morning Meditation", "Mindfulness", "🧘"),
    DefaultHabit("Exercise", "Health", "🏃"),
    DefaultHabit("Journaling", "Reflection", "📝"),
    DefaultHabit("Read", "Learning", "📚"),
    DefaultHabit("Hydrate", "Health", "💧"),
)


# ---------------------------------------------------------------------------
# View model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HabitViewEntry:
    """A habit joined with today's completion flag."""

    habit: HabitRecord
    completed: bool

    @property
    def streak(self) -> int:
        return self.habit.streak or 0

    @property
    def show_streak_badge(self) -> bool:
        return self.habit.tracks_streak and self.streak > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.habit.id,
            "name": self.habit.name,
            "category": self.habit.category,
            "icon": self.habit.icon or DEFAULT_ICON,
            "frequency": self.habit.frequency or DEFAULT_FREQUENCY,
            "streak": self.habit.streak,
            "completed": self.completed,
            "created_at": self.habit.created_at.isoformat() if self.habit.created_at else None,
        }


@dataclass
class HabitBoard:
    """Everything the habits page renders for one user."""

    today: date
    entries: list[HabitViewEntry]
    streaks_enabled: bool
    errors: list[str] = field(default_factory=list)

    @property
    def completed_count(self) -> int:
        return sum(1 for entry in self.entries if entry.completed)

    @property
    def total_streak(self) -> int:
        return sum(entry.streak for entry in self.entries)

    @property
    def progress_percent(self) -> int:
        if not self.entries:
            return 0
        return round(self.completed_count * 100 / len(self.entries))

    def to_dict(self) -> dict[str, Any]:
        return {
            "today": self.today.isoformat(),
            "streaks_enabled": self.streaks_enabled,
            "completed_count": self.completed_count,
            "total": len(self.entries),
            "total_streak": self.total_streak,
            "habits": [entry.to_dict() for entry in self.entries],
            "errors": list(self.errors),
        }


# ---------------------------------------------------------------------------
# Completion resolver
# ---------------------------------------------------------------------------


def resolve_completed_today(store: HabitStore, *, user_id: int, today: date) -> set[int]:
    """Return ids of the user's habits with a completion record dated ``today``."""

    return {record.habit_id for record in store.completions_on(today, user_id=user_id)}


def tag_completions(
    habits: Iterable[HabitRecord], completed_ids: set[int]
) -> list[HabitViewEntry]:
    return [HabitViewEntry(habit=habit, completed=habit.id in completed_ids) for habit in habits]


def probe_streak_capability(habits: list[HabitRecord]) -> bool:
    """True when the store's habit records carry a streak field.

    Only the first record is inspected; with no habits there is nothing to
    write to, so streak tracking counts as unavailable.
    """

    return bool(habits) and habits[0].tracks_streak


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------


def next_streak(
    previous: Optional[int],
    recent_dates: Iterable[date],
    *,
    completed: bool,
    today: date,
) -> int:
    """Streak value after a toggle, given the habit's recent completion dates.

    A completion continues the run only when yesterday was also completed;
    otherwise a fresh run of 1 starts. Un-completing always resets to 0.
    """

    if not completed:
        return 0
    yesterday = today - timedelta(days=1)
    if yesterday in set(recent_dates):
        return max(previous or 0, 0) + 1
    return 1


def compute_new_streak(
    store: HabitStore,
    habit: HabitRecord,
    toggled_to_completed: bool,
    *,
    today: date,
    lookback: int = STREAK_LOOKBACK,
) -> int:
    """Look up recent completions and return the habit's new streak.

    Store failures are logged and produce 0 so a toggle is never blocked by
    the streak lookup.
    """

    if not toggled_to_completed:
        return 0
    try:
        recent = store.recent_completion_dates(habit.id, limit=lookback)
    except StoreError as exc:
        logger.error("Error calculating streak for habit %s: %s", habit.id, exc)
        return 0
    return next_streak(habit.streak, recent, completed=True, today=today)


def compute_streaks(dates: Iterable[date], *, today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from completion dates.

    The current run may end today or yesterday; a day without a record
    before that breaks it.
    """

    days = set(dates)

    current = 0
    cursor = today if today in days else today - timedelta(days=1)
    while cursor in days:
        current += 1
        cursor -= timedelta(days=1)

    longest = 0
    run = 0
    last_day: date | None = None
    for d in sorted(days):
        if last_day is not None and d == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d

    return current, longest


# ---------------------------------------------------------------------------
# Seeder
# ---------------------------------------------------------------------------


def ensure_defaults(
    store: HabitStore,
    *,
    user_id: int,
    defaults: Iterable[DefaultHabit] = DEFAULT_HABITS,
) -> list[str]:
    """Insert whichever default habits the user does not have yet.

    Returns the names inserted. Two concurrent calls for a new user can both
    see a name as missing and insert it twice; nothing at this layer
    prevents that.
    """

    existing = set(store.list_habit_names(user_id=user_id))
    missing = [habit for habit in defaults if habit.name not in existing]
    if missing:
        store.insert_habits(habit.insert_payload(user_id) for habit in missing)
        logger.info(
            "Seeded default habits",
            extra={"user_id": user_id, "habits": [habit.name for habit in missing]},
        )
    return [habit.name for habit in missing]


# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


class HabitTracker:
    """Entry point used by the web layer for every habit action."""

    def __init__(
        self,
        store: HabitStore,
        *,
        today_provider: Callable[[], date] = local_today,
        lookback: int = STREAK_LOOKBACK,
    ):
        self.store = store
        self.today_provider = today_provider
        self.lookback = lookback
        self._in_flight: set[int] = set()
        self._in_flight_lock = threading.Lock()

    @contextmanager
    def _saving(self, habit_id: int) -> Iterator[None]:
        """Reject a second save of the same habit while one is running."""

        with self._in_flight_lock:
            if habit_id in self._in_flight:
                raise ToggleInProgressError("This habit is already being saved.")
            self._in_flight.add(habit_id)
        try:
            yield
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(habit_id)

    def fetch(self, user_id: int) -> HabitBoard:
        """Load habits and today's completion flags without seeding."""

        today = self.today_provider()
        habits = self.store.list_habits(user_id=user_id)
        completed_ids = resolve_completed_today(self.store, user_id=user_id, today=today)
        return HabitBoard(
            today=today,
            entries=tag_completions(habits, completed_ids),
            streaks_enabled=probe_streak_capability(habits),
        )

    def ensure_defaults_and_fetch(self, user_id: int) -> HabitBoard:
        errors: list[str] = []
        try:
            ensure_defaults(self.store, user_id=user_id)
        except StoreError as exc:
            logger.error("Error ensuring default habits for user %s: %s", user_id, exc)
            errors.append(f"Error ensuring default habits: {exc}")
        board = self.fetch(user_id)
        board.errors.extend(errors)
        return board

    def toggle(self, user_id: int, habit_id: int) -> HabitBoard:
        """Flip today's completion for a habit, update its streak, re-fetch.

        The completion write and the streak write are separate; if the second
        fails the habit stays completed with its old streak and the
        ``StoreError`` propagates.
        """

        with self._saving(habit_id):
            habits = self.store.list_habits(user_id=user_id)
            streaks_enabled = probe_streak_capability(habits)
            habit = next((h for h in habits if h.id == habit_id), None)
            if habit is None:
                raise HabitNotFoundError(f"Habit {habit_id} not found.")

            today = self.today_provider()
            if self.store.has_completion(habit.id, today):
                self.store.delete_completion(habit.id, today)
                completed = False
            else:
                self.store.insert_completion(habit_id=habit.id, user_id=user_id, day=today)
                completed = True

            new_streak: Optional[int] = None
            if streaks_enabled:
                new_streak = compute_new_streak(
                    self.store, habit, completed, today=today, lookback=self.lookback
                )
                self.store.update_streak(habit.id, new_streak)
            else:
                logger.debug("Skipping streak update for habit %s; column missing", habit.id)

            logger.info(
                "Habit toggled",
                extra={
                    "user_id": user_id,
                    "habit_id": habit.id,
                    "completed": completed,
                    "streak": new_streak,
                },
            )
        return self.fetch(user_id)

    def add_habit(self, user_id: int, fields: Mapping[str, Any]) -> HabitBoard:
        """Create a custom habit unless the user already has one by that name."""

        name = str(fields.get("name") or "").strip()
        if not name:
            raise InvalidHabitError("Please provide a habit name.")
        if self.store.find_habit_by_name(name, user_id=user_id) is not None:
            raise DuplicateHabitError("A habit with this name already exists")

        self.store.insert_habits(
            [
                {
                    "name": name,
                    "category": fields.get("category") or "Other",
                    "icon": fields.get("icon") or DEFAULT_ICON,
                    "frequency": fields.get("frequency") or DEFAULT_FREQUENCY,
                    "user_id": user_id,
                }
            ]
        )
        logger.info("Habit created", extra={"user_id": user_id, "habit_name": name})
        return self.fetch(user_id)

    def delete_habit(self, user_id: int, habit_id: int) -> HabitBoard:
        with self._saving(habit_id):
            if not self.store.delete_habit(habit_id, user_id=user_id):
                raise HabitNotFoundError(f"Habit {habit_id} not found.")
            logger.info("Habit deleted", extra={"user_id": user_id, "habit_id": habit_id})
        return self.fetch(user_id)


__all__ = [
    "CATEGORY_OPTIONS",
    "DEFAULT_HABITS",
    "DefaultHabit",
    "HabitBoard",
    "HabitTracker",
    "HabitViewEntry",
    "ICON_OPTIONS",
    "compute_new_streak",
    "compute_streaks",
    "ensure_defaults",
    "next_streak",
    "probe_streak_capability",
    "resolve_completed_today",
    "tag_completions",
]
