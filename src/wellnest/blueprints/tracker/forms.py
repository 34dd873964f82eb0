"""Mood check-in form definitions."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from ...services.moods import DEFAULT_ENERGY, DEFAULT_SLEEP_HOURS
from ..forms import FormModel


class MoodForm(FormModel):
    """Form model for a mood/energy/sleep check-in."""

    mood_score: Optional[int] = Field(default=None, ge=1, le=10)
    energy_level: int = Field(default=DEFAULT_ENERGY, ge=1, le=5)
    sleep_hours: float = Field(default=DEFAULT_SLEEP_HOURS, ge=0, le=12, multiple_of=0.5)
    notes: str = Field(default="", max_length=2000)

    @field_validator("mood_score", mode="before")
    @classmethod
    def blank_mood(cls, value: Any) -> Any:
        return None if value in (None, "") else value

    @field_validator("mood_score")
    @classmethod
    def require_mood(cls, value: Optional[int]) -> int:
        if value is None:
            raise ValueError("Please select a mood")
        return value

    @field_validator("energy_level", mode="before")
    @classmethod
    def default_energy(cls, value: Any) -> Any:
        return DEFAULT_ENERGY if value in (None, "") else value

    @field_validator("sleep_hours", mode="before")
    @classmethod
    def default_sleep(cls, value: Any) -> Any:
        return DEFAULT_SLEEP_HOURS if value in (None, "") else value

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes(cls, value: Any) -> Any:
        return "" if value is None else value


__all__ = ["MoodForm"]
