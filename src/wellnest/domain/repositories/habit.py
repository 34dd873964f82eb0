"""Habit row-store protocol."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional, Protocol

from ..records import CompletionRecord, HabitRecord


class HabitStore(Protocol):
    """Table-like access to ``habits`` and ``habit_completions``.

    Every method raises ``StoreError`` when the underlying store fails.
    """

    def list_habits(self, *, user_id: int) -> list[HabitRecord]:
        """Return the user's habits ordered by creation time, oldest first."""
        ...

    def list_habit_names(self, *, user_id: int) -> list[str]:
        """Return the names of the user's habits."""
        ...

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[HabitRecord]:
        """Retrieve one habit owned by the user."""
        ...

    def find_habit_by_name(self, name: str, *, user_id: int) -> Optional[HabitRecord]:
        """Retrieve a habit by exact name."""
        ...

    def insert_habits(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Insert habit rows, dropping keys the table has no column for."""
        ...

    def update_streak(self, habit_id: int, streak: int) -> None:
        """Write a habit's streak value."""
        ...

    def delete_habit(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit together with its completion records."""
        ...

    # Completion records
    def completions_on(self, day: date, *, user_id: int) -> list[CompletionRecord]:
        """Completion records dated ``day`` for the user."""
        ...

    def completions_between(
        self, start: date, end: date, *, user_id: int
    ) -> list[CompletionRecord]:
        """Completion records with ``start <= completed_date <= end``."""
        ...

    def recent_completion_dates(self, habit_id: int, *, limit: int) -> list[date]:
        """Most recent completion dates for a habit, newest first."""
        ...

    def has_completion(self, habit_id: int, day: date) -> bool:
        ...

    def insert_completion(self, *, habit_id: int, user_id: int, day: date) -> CompletionRecord:
        """Record a completion unless one already exists for that day."""
        ...

    def delete_completion(self, habit_id: int, day: date) -> bool:
        """Remove the completion for that day, if any."""
        ...
