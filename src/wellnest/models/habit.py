"""Habit tracking tables."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import func
from sqlmodel import Field, SQLModel

HABITS_TABLE = "habits"
COMPLETIONS_TABLE = "habit_completions"


class Habit(SQLModel, table=True):
    """A user-defined habit tracked once per day.

    ``icon``, ``frequency`` and ``streak`` are optional columns: stores
    created before they existed keep working, so every column past
    ``category`` carries a server default and inserts may omit it.
    """

    __tablename__: ClassVar[str] = HABITS_TABLE

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    category: str = Field(default="Other", nullable=False, max_length=32)
    icon: Optional[str] = Field(
        default=None, max_length=16, sa_column_kwargs={"server_default": "⭐"}
    )
    frequency: Optional[str] = Field(
        default=None, max_length=32, sa_column_kwargs={"server_default": "Daily"}
    )
    streak: Optional[int] = Field(default=0, sa_column_kwargs={"server_default": "0"})
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_column_kwargs={"server_default": func.now()},
    )


class HabitCompletion(SQLModel, table=True):
    """A habit marked done on one calendar day.

    Uniqueness of (habit_id, completed_date) is kept by the store's
    check-then-insert, not by a table constraint.
    """

    __tablename__: ClassVar[str] = COMPLETIONS_TABLE

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key=f"{HABITS_TABLE}.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    completed_date: date = Field(nullable=False, index=True)
