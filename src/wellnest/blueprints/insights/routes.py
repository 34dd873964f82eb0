"""AI insight API."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_context
from ...services.dashboard import habit_stats
from ...services.insights import build_summary
from ..common import require_user_id
from . import bp

SUMMARY_CHECKINS = 7


@bp.post("/ai-insights")
def ai_insights():
    """Return a short suggestion derived from recent moods and habits."""

    user_id = require_user_id()
    ctx = get_context()
    summary = build_summary(
        checkins=ctx.mood_repo.list_recent(user_id=user_id, limit=SUMMARY_CHECKINS),
        habit_stats=habit_stats(ctx.habit_store, user_id=user_id, today=ctx.today()),
    )
    return jsonify({"suggestion": ctx.insights.suggest(summary)})
