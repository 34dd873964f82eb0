"""Mood check-in repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ...models.mood import MoodCheckin


class MoodRepository(Protocol):
    """Repository for mood check-ins."""

    def create(self, checkin: MoodCheckin, *, user_id: int) -> MoodCheckin:
        ...

    def list_recent(self, *, user_id: int, limit: int) -> list[MoodCheckin]:
        """Newest check-ins first."""
        ...

    def list_since(self, since: datetime, *, user_id: int) -> list[MoodCheckin]:
        """Check-ins created at or after ``since``, oldest first."""
        ...
