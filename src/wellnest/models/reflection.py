"""Weekly reflection table."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Reflection(SQLModel, table=True):
    """A written answer to one of the weekly reflection prompts."""

    __tablename__: ClassVar[str] = "reflections"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    prompt: str = Field(nullable=False, max_length=255)
    response: str = Field(nullable=False)
    category: str = Field(nullable=False, max_length=32)
    week_start: date = Field(nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
