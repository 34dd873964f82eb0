"""Explicit record types returned by the row store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

DEFAULT_ICON = "⭐"
DEFAULT_FREQUENCY = "Daily"


@dataclass(frozen=True)
class HabitRecord:
    """One row of the ``habits`` table.

    ``streak`` is ``None`` only when the backing table has no streak column;
    a NULL value in an existing column is read as 0.
    """

    id: int
    user_id: int
    name: str
    category: str
    created_at: Optional[datetime] = None
    icon: Optional[str] = None
    frequency: Optional[str] = None
    streak: Optional[int] = None

    @property
    def tracks_streak(self) -> bool:
        return self.streak is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], *, has_streak: bool) -> "HabitRecord":
        streak: Optional[int] = None
        if has_streak:
            streak = int(row.get("streak") or 0)
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row.get("category") or "Other",
            created_at=row.get("created_at"),
            icon=row.get("icon"),
            frequency=row.get("frequency"),
            streak=streak,
        )


@dataclass(frozen=True)
class CompletionRecord:
    """One row of the ``habit_completions`` table."""

    habit_id: int
    completed_date: date
    user_id: Optional[int] = None
    id: Optional[int] = None
