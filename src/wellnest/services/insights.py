"""Client for the external AI insights endpoint."""

from __future__ import annotations

from typing import Any, Optional

import requests

from ..logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_MESSAGE = "Unable to generate insights at the moment."


class InsightsClient:
    """Posts a wellbeing summary to a suggestion service.

    Every failure (no endpoint, network error, bad status, malformed body)
    yields ``FALLBACK_MESSAGE``; callers never see an exception.
    """

    def __init__(
        self,
        url: Optional[str],
        *,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    def suggest(self, summary: dict[str, Any]) -> str:
        if not self.url:
            return FALLBACK_MESSAGE

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(
                self.url, json=summary, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            logger.warning("Insights request failed: %s", exc)
            return FALLBACK_MESSAGE
        except ValueError as exc:
            logger.warning("Insights response was not JSON: %s", exc)
            return FALLBACK_MESSAGE

        suggestion = body.get("suggestion") if isinstance(body, dict) else None
        if not isinstance(suggestion, str) or not suggestion.strip():
            logger.warning("Insights response missing suggestion")
            return FALLBACK_MESSAGE
        return suggestion.strip()


def build_summary(
    *,
    checkins: list[Any],
    habit_stats: list[Any],
) -> dict[str, Any]:
    """Compact payload describing recent moods and habit completion counts."""

    return {
        "recent_moods": [
            {
                "mood_score": checkin.mood_score,
                "energy_level": checkin.energy_level,
                "sleep_hours": checkin.sleep_hours,
                "notes": checkin.notes,
            }
            for checkin in checkins
        ],
        "habits": [
            {"name": stat.name, "completed_days": stat.completed_days}
            for stat in habit_stats
        ],
    }
