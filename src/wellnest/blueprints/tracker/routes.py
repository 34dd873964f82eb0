"""Mood tracker routes."""

from __future__ import annotations

from flask import current_app, flash, jsonify, redirect, render_template, request, url_for

from ...extensions import get_context
from ...services.moods import ENERGY_LABELS, recent_checkins, record_checkin
from ..common import login_required, prefers_json_response, require_user_id
from . import bp
from .forms import MoodForm

FIELDS = ("mood_score", "energy_level", "sleep_hours", "notes")


def _recent(user_id: int):
    ctx = get_context()
    return recent_checkins(
        ctx.mood_repo,
        user_id=user_id,
        today=ctx.today(),
        limit=current_app.config.get("RECENT_CHECKINS", 3),
        tz=ctx.tz,
    )


@bp.get("/")
@login_required
def checkin_form():
    """Show the check-in form and the latest check-ins."""

    recent = _recent(require_user_id())
    if prefers_json_response():
        return jsonify({"recent": [item.to_dict() for item in recent]})
    return render_template(
        "tracker/index.html", recent=recent, energy_labels=ENERGY_LABELS, errors={}
    )


@bp.post("/")
@login_required
def save_checkin():
    user_id = require_user_id()
    source = request.get_json(silent=True) if request.is_json else request.form
    source = source or {}
    form = MoodForm.from_payload({key: source.get(key) for key in FIELDS})

    errors = form.validation_errors()
    if errors:
        message = MoodForm.first_error(errors)
        if prefers_json_response():
            return jsonify({"error": "validation_error", "message": message, "fields": errors}), 400
        flash(message, "error")
        return redirect(url_for("tracker.checkin_form"))

    data = form.cleaned()
    checkin = record_checkin(
        get_context().mood_repo,
        user_id=user_id,
        mood_score=data.mood_score,
        energy_level=data.energy_level,
        sleep_hours=data.sleep_hours,
        notes=data.notes,
    )
    if prefers_json_response():
        recent = _recent(user_id)
        return (
            jsonify({"id": checkin.id, "recent": [item.to_dict() for item in recent]}),
            201,
        )
    flash("Check-in saved!", "success")
    return redirect(url_for("tracker.checkin_form"))
