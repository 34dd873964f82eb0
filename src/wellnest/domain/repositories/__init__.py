"""Repository protocol definitions for domain layer."""

from .habit import HabitStore
from .mood import MoodRepository
from .reflection import ReflectionRepository

__all__ = [
    "HabitStore",
    "MoodRepository",
    "ReflectionRepository",
]
