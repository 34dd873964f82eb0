"""Habit form definitions."""

from __future__ import annotations

from pydantic import Field, field_validator

from ...domain.records import DEFAULT_FREQUENCY, DEFAULT_ICON
from ...services.habits import CATEGORY_OPTIONS
from ..forms import FormModel

FREQUENCY_OPTIONS = ("Daily", "Weekly")


class HabitForm(FormModel):
    """Form model for creating a habit."""

    name: str = Field(default="", description="Short label for the habit", max_length=100)
    category: str = Field(default="Other", description="One of the category options")
    icon: str = Field(default=DEFAULT_ICON, max_length=16)
    frequency: str = Field(default=DEFAULT_FREQUENCY, description="How often the habit repeats")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the habit name is present when validating submissions."""

        if not value or not value.strip():
            raise ValueError("Please provide a habit name.")
        return value

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        if not value:
            return "Other"
        if value not in CATEGORY_OPTIONS:
            raise ValueError(f"Unknown category: {value}")
        return value

    @field_validator("icon")
    @classmethod
    def default_icon(cls, value: str) -> str:
        return value or DEFAULT_ICON

    @field_validator("frequency")
    @classmethod
    def validate_frequency(cls, value: str) -> str:
        if not value:
            return DEFAULT_FREQUENCY
        if value not in FREQUENCY_OPTIONS:
            raise ValueError(f"Unknown frequency: {value}")
        return value


__all__ = ["FREQUENCY_OPTIONS", "HabitForm"]
