"""SQLModel table exports."""

from .habit import Habit, HabitCompletion
from .mood import MoodCheckin
from .reflection import Reflection
from .user import User

__all__ = [
    "Habit",
    "HabitCompletion",
    "MoodCheckin",
    "Reflection",
    "User",
]
