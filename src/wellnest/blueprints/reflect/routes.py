"""Weekly reflection routes."""

from __future__ import annotations

from flask import flash, jsonify, redirect, render_template, request, url_for

from ...extensions import get_context
from ...services.reflections import PROMPTS, reflections_by_week, save_reflection
from ..common import login_required, prefers_json_response, require_user_id
from . import bp
from .forms import ReflectionForm


@bp.get("/")
@login_required
def list_reflections():
    """Show the prompts and past reflections grouped by week."""

    ctx = get_context()
    weeks = reflections_by_week(ctx.reflection_repo, user_id=require_user_id(), today=ctx.today())
    if prefers_json_response():
        return jsonify({"weeks": [week.to_dict() for week in weeks]})
    return render_template("reflect/index.html", prompts=PROMPTS, weeks=weeks)


@bp.post("/")
@login_required
def save():
    user_id = require_user_id()
    source = request.get_json(silent=True) if request.is_json else request.form
    source = source or {}
    form = ReflectionForm.from_payload(
        {"prompt_id": source.get("prompt_id"), "response": source.get("response") or ""}
    )

    errors = form.validation_errors()
    if errors:
        message = ReflectionForm.first_error(errors)
        if prefers_json_response():
            return jsonify({"error": "validation_error", "message": message, "fields": errors}), 400
        flash(message, "error")
        return redirect(url_for("reflect.list_reflections"))

    ctx = get_context()
    data = form.cleaned()
    reflection = save_reflection(
        ctx.reflection_repo,
        user_id=user_id,
        prompt_id=data.prompt_id,
        response=data.response,
        today=ctx.today(),
    )
    if prefers_json_response():
        return (
            jsonify(
                {
                    "id": reflection.id,
                    "category": reflection.category,
                    "week_start": reflection.week_start.isoformat(),
                }
            ),
            201,
        )
    flash("Reflection saved!", "success")
    return redirect(url_for("reflect.list_reflections"))
