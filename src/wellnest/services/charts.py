"""PNG chart rendering for the dashboard."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .dashboard import TrendPoint

MOOD_COLOR = "#32746d"
SLEEP_COLOR = "#9ec5ab"


def mood_trend_png(points: Sequence[TrendPoint]) -> bytes:
    """Render the weekly mood and sleep trend as a PNG line chart."""

    fig, ax = plt.subplots(figsize=(8, 4.5))
    try:
        if not any(point.mood is not None or point.sleep is not None for point in points):
            ax.text(
                0.5,
                0.5,
                "No check-ins yet\nLog your mood to see the trend",
                ha="center",
                va="center",
                fontsize=12,
                color="#999",
            )
            ax.axis("off")
        else:
            labels = [point.label for point in points]
            positions = range(len(points))
            # Missing days are NaN so the line breaks instead of dropping to zero.
            moods = [point.mood if point.mood is not None else float("nan") for point in points]
            sleep = [point.sleep if point.sleep is not None else float("nan") for point in points]

            ax.plot(positions, moods, marker="o", linewidth=2, color=MOOD_COLOR, label="Mood")
            ax.plot(positions, sleep, marker="s", linewidth=2, color=SLEEP_COLOR, label="Sleep (h)")
            ax.set_xticks(list(positions))
            ax.set_xticklabels(labels)
            ax.set_ylim(0, 12)
            ax.grid(True, linestyle="--", alpha=0.4)
            ax.legend(loc="upper left", framealpha=0.9)
            ax.set_title("Weekly Mood & Sleep Trend", fontsize=14, fontweight="bold")
            for spine in ("top", "right"):
                ax.spines[spine].set_visible(False)

        buffer = BytesIO()
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
        return buffer.getvalue()
    finally:
        plt.close(fig)
