"""Reflection form definitions."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from ...services.reflections import get_prompt
from ..forms import FormModel


class ReflectionForm(FormModel):
    """Answer to one weekly reflection prompt."""

    prompt_id: int = Field(default=0)
    response: str = Field(default="", max_length=5000)

    @field_validator("prompt_id", mode="before")
    @classmethod
    def coerce_prompt(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator("prompt_id")
    @classmethod
    def validate_prompt(cls, value: int) -> int:
        if get_prompt(value) is None:
            raise ValueError("Invalid prompt")
        return value

    @field_validator("response")
    @classmethod
    def require_response(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Please write your reflection before saving")
        return value


__all__ = ["ReflectionForm"]
