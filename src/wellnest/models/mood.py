"""Mood check-in table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class MoodCheckin(SQLModel, table=True):
    """One mood/energy/sleep check-in."""

    __tablename__: ClassVar[str] = "moods"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    mood_score: int = Field(nullable=False, ge=1, le=10)
    energy_level: int = Field(default=3, nullable=False, ge=1, le=5)
    sleep_hours: float = Field(default=8.0, nullable=False)
    notes: str = Field(default="", max_length=2000)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
