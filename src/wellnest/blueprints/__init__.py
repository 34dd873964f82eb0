"""Blueprint exports."""

from . import auth, dashboard, habits, insights, reflect, tracker

__all__ = [
    "auth",
    "dashboard",
    "habits",
    "insights",
    "reflect",
    "tracker",
]
