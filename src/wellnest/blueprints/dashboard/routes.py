"""Dashboard routes."""

from __future__ import annotations

from flask import Response, jsonify, render_template

from ...extensions import get_context
from ...services.charts import mood_trend_png
from ...services.dashboard import build_dashboard, mood_trend
from ..common import login_required, prefers_json_response, require_user_id
from . import bp


@bp.get("/")
@login_required
def overview():
    """Weekly mood trend, habit completion rates and recent activity."""

    ctx = get_context()
    dashboard = build_dashboard(
        ctx.habit_store,
        ctx.mood_repo,
        ctx.reflection_repo,
        user_id=require_user_id(),
        now=ctx.now(),
        tz=ctx.tz,
    )
    if prefers_json_response():
        return jsonify(dashboard.to_dict())
    return render_template("dashboard/index.html", dashboard=dashboard)


@bp.get("/mood-chart.png")
@login_required
def mood_chart():
    ctx = get_context()
    points = mood_trend(ctx.mood_repo, user_id=require_user_id(), today=ctx.today(), tz=ctx.tz)
    response = Response(mood_trend_png(points), mimetype="image/png")
    response.headers["Cache-Control"] = "no-store"
    return response
