"""Service layer for habits, check-ins, reflections and insights."""
