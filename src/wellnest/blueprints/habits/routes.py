"""Habit routes."""

from __future__ import annotations

from flask import flash, jsonify, redirect, render_template, request, url_for

from ...extensions import get_context
from ...services.habits import CATEGORY_OPTIONS, ICON_OPTIONS, HabitBoard
from ..common import login_required, prefers_json_response, require_user_id
from . import bp
from .forms import FREQUENCY_OPTIONS, HabitForm


def _board_response(board: HabitBoard, status: int = 200):
    if prefers_json_response():
        return jsonify(board.to_dict()), status
    return redirect(url_for("habits.list_habits"))


@bp.get("/")
@login_required
def list_habits():
    """Show today's habits, seeding the defaults on first visit."""

    board = get_context().tracker.ensure_defaults_and_fetch(require_user_id())
    if prefers_json_response():
        return jsonify(board.to_dict())
    return render_template(
        "habits/index.html",
        board=board,
        category_options=CATEGORY_OPTIONS,
        icon_options=ICON_OPTIONS,
        frequency_options=FREQUENCY_OPTIONS,
    )


@bp.post("/<int:habit_id>/toggle")
@login_required
def toggle_habit(habit_id: int):
    """Toggle habit completion state for today."""

    board = get_context().tracker.toggle(require_user_id(), habit_id)
    return _board_response(board)


@bp.post("/new")
@login_required
def new_habit():
    """Create a custom habit."""

    source = request.get_json(silent=True) if request.is_json else request.form
    source = source or {}
    payload = {
        key: str(source.get(key, "") or "")
        for key in ("name", "category", "icon", "frequency")
    }

    form = HabitForm.from_payload(payload)
    errors = form.validation_errors()
    if errors:
        message = HabitForm.first_error(errors)
        if prefers_json_response():
            return jsonify({"error": "validation_error", "message": message, "fields": errors}), 400
        flash(message, "error")
        return redirect(url_for("habits.list_habits"))

    board = get_context().tracker.add_habit(require_user_id(), form.cleaned().model_dump())
    if not prefers_json_response():
        flash("Habit added.", "success")
    return _board_response(board, status=201)


@bp.post("/<int:habit_id>/delete")
@login_required
def delete_habit(habit_id: int):
    board = get_context().tracker.delete_habit(require_user_id(), habit_id)
    if not prefers_json_response():
        flash("Habit deleted.", "info")
    return _board_response(board)
