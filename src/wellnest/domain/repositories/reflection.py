"""Reflection repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.reflection import Reflection


class ReflectionRepository(Protocol):
    """Repository for weekly reflections."""

    def create(self, reflection: Reflection, *, user_id: int) -> Reflection:
        ...

    def list_all(self, *, user_id: int) -> list[Reflection]:
        """All reflections, newest first."""
        ...

    def list_recent(self, *, user_id: int, limit: int) -> list[Reflection]:
        ...
