"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitStore
from .mood import SQLModelMoodRepository
from .reflection import SQLModelReflectionRepository

__all__ = [
    "SQLModelHabitStore",
    "SQLModelMoodRepository",
    "SQLModelReflectionRepository",
]
