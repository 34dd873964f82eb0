"""Exceptions raised by the domain and store layers."""

from __future__ import annotations


class WellnestError(Exception):
    """Base class for application errors surfaced to users."""

    code = "error"
    status_code = 500


class NotAuthenticatedError(WellnestError):
    """No signed-in user; the caller must go through the login flow."""

    code = "not_authenticated"
    status_code = 401


class StoreError(WellnestError):
    """A read or write against the row store failed."""

    code = "store_error"
    status_code = 503


class HabitNotFoundError(WellnestError):
    code = "habit_not_found"
    status_code = 404


class InvalidHabitError(WellnestError, ValueError):
    """A habit submitted without the fields it needs."""

    code = "invalid_habit"
    status_code = 400


class DuplicateHabitError(WellnestError, ValueError):
    """Manual habit creation collided with an existing name."""

    code = "duplicate_habit"
    status_code = 409


class ToggleInProgressError(WellnestError):
    """The same habit is already being toggled."""

    code = "toggle_in_progress"
    status_code = 409
