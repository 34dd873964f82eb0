"""Weekly reflection prompts and history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from ..domain.repositories.reflection import ReflectionRepository
from ..logging_config import get_logger
from ..models.reflection import Reflection
from .dates import short_date, week_end, week_start

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReflectionPrompt:
    id: int
    question: str
    category: str
    icon: str


PROMPTS: tuple[ReflectionPrompt, ...] = (
    ReflectionPrompt(1, "What were the highlights of your week?", "Positivity", "✨"),
    ReflectionPrompt(
        2, "What challenges did you face and how did you overcome them?", "Growth", "🏔️"
    ),
    ReflectionPrompt(3, "Which habit made the biggest impact on your wellbeing?", "Habits", "🎯"),
    ReflectionPrompt(4, "How has your mood evolved this week?", "Emotions", "📈"),
    ReflectionPrompt(5, "What self-care moments are you most grateful for?", "Gratitude", "🙏"),
    ReflectionPrompt(6, "What's your intention for next week?", "Planning", "🎪"),
)


def get_prompt(prompt_id: int) -> Optional[ReflectionPrompt]:
    return next((prompt for prompt in PROMPTS if prompt.id == prompt_id), None)


@dataclass
class ReflectionWeek:
    """Reflections written during one Sunday-based week."""

    week_start: date
    label: str
    reflections: list[Reflection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "week_start": self.week_start.isoformat(),
            "label": self.label,
            "reflections": [
                {
                    "id": item.id,
                    "prompt": item.prompt,
                    "response": item.response,
                    "category": item.category,
                    "created_at": item.created_at.isoformat(),
                }
                for item in self.reflections
            ],
        }


def week_label(start: date, today: date) -> str:
    """``This week``, ``Last week`` or a ``MMM d - MMM d`` range."""

    current = week_start(today)
    if start == current:
        return "This week"
    if start == current - timedelta(days=7):
        return "Last week"
    return f"{short_date(start)} - {short_date(week_end(start))}"


def save_reflection(
    repo: ReflectionRepository,
    *,
    user_id: int,
    prompt_id: int,
    response: str,
    today: date,
) -> Reflection:
    """Store an answer to one of the fixed prompts."""

    prompt = get_prompt(prompt_id)
    if prompt is None:
        raise ValueError("Invalid prompt")
    response = response.strip()
    if not response:
        raise ValueError("Please write your reflection before saving")

    reflection = Reflection(
        user_id=user_id,
        prompt=prompt.question,
        response=response,
        category=prompt.category,
        week_start=week_start(today),
    )
    saved = repo.create(reflection, user_id=user_id)
    logger.info(
        "Reflection saved",
        extra={"user_id": user_id, "reflection_id": saved.id, "category": prompt.category},
    )
    return saved


def reflections_by_week(
    repo: ReflectionRepository, *, user_id: int, today: date
) -> list[ReflectionWeek]:
    """Group the user's reflections by week, newest week first."""

    weeks: dict[date, ReflectionWeek] = {}
    for reflection in repo.list_all(user_id=user_id):
        bucket = weeks.get(reflection.week_start)
        if bucket is None:
            bucket = ReflectionWeek(
                week_start=reflection.week_start,
                label=week_label(reflection.week_start, today),
            )
            weeks[reflection.week_start] = bucket
        bucket.reflections.append(reflection)
    return sorted(weeks.values(), key=lambda week: week.week_start, reverse=True)
