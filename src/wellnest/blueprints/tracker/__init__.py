"""Mood tracker blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("tracker", __name__, url_prefix="/tracker")

from . import routes  # noqa: E402,F401 - import routes for registration

__all__ = ["bp"]
