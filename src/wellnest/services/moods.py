"""Mood check-in service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from ..domain.repositories.mood import MoodRepository
from ..logging_config import get_logger
from ..models.mood import MoodCheckin
from .dates import day_label

logger = get_logger(__name__)

ENERGY_LABELS = {
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Very High",
}
DEFAULT_ENERGY = 3
DEFAULT_SLEEP_HOURS = 8.0


def energy_label(level: int) -> str:
    return ENERGY_LABELS.get(level, ENERGY_LABELS[DEFAULT_ENERGY])


@dataclass(frozen=True)
class CheckinSummary:
    """A check-in prepared for the "recent check-ins" list."""

    id: Optional[int]
    label: str
    mood_score: int
    energy_level: int
    energy_label: str
    sleep_hours: float
    notes: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "mood_score": self.mood_score,
            "energy_level": self.energy_level,
            "energy_label": self.energy_label,
            "sleep_hours": self.sleep_hours,
            "notes": self.notes,
        }


def record_checkin(
    repo: MoodRepository,
    *,
    user_id: int,
    mood_score: int,
    energy_level: int = DEFAULT_ENERGY,
    sleep_hours: float = DEFAULT_SLEEP_HOURS,
    notes: str = "",
) -> MoodCheckin:
    """Persist a check-in for the user."""

    checkin = MoodCheckin(
        user_id=user_id,
        mood_score=mood_score,
        energy_level=energy_level,
        sleep_hours=sleep_hours,
        notes=notes.strip(),
    )
    saved = repo.create(checkin, user_id=user_id)
    logger.info(
        "Mood check-in saved",
        extra={"user_id": user_id, "checkin_id": saved.id, "mood_score": mood_score},
    )
    return saved


def recent_checkins(
    repo: MoodRepository,
    *,
    user_id: int,
    today: date,
    limit: int = 3,
    tz: Optional[tzinfo] = None,
) -> list[CheckinSummary]:
    """Newest check-ins labelled Today / Yesterday / date."""

    summaries = []
    for checkin in repo.list_recent(user_id=user_id, limit=limit):
        created: datetime = checkin.created_at
        summaries.append(
            CheckinSummary(
                id=checkin.id,
                label=day_label(created, today, tz),
                mood_score=checkin.mood_score,
                energy_level=checkin.energy_level,
                energy_label=energy_label(checkin.energy_level),
                sleep_hours=checkin.sleep_hours,
                notes=checkin.notes,
            )
        )
    return summaries
