"""Dashboard aggregates: mood trend, habit completion rates, activity feed."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from ..domain.repositories.habit import HabitStore
from ..domain.repositories.mood import MoodRepository
from ..domain.repositories.reflection import ReflectionRepository
from .dates import relative_time, to_local
from .habits import compute_streaks

TREND_DAYS = 7
COMPLETION_WINDOW_DAYS = 30
ACTIVITY_LIMIT = 8

QUOTES = (
    "The greatest glory in living lies not in never falling, but in rising every time we fall.",
    "Your wellness journey is unique, so celebrate every small victory.",
    "Peace comes from within. Do not seek it without.",
    "Take care of your body. It's the only place you have to live.",
    "Happiness is not by chance, but by choice.",
    "You are braver than you believe, stronger than you seem, and smarter than you think.",
    "The only way to do great work is to love what you do.",
    "Self-care is not selfish. You cannot serve from an empty vessel.",
    "Progress, not perfection, is the goal.",
    "Your mental health is a priority, not a luxury.",
    "Be kind to yourself. You're doing the best you can.",
    "Healing doesn't mean the damage never existed. It means the damage no longer controls our lives.",
)


def quote_of_the_day(today: date) -> str:
    """Same quote for everyone on a given day."""
    return QUOTES[today.toordinal() % len(QUOTES)]


def _mean(values: list[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 1)


@dataclass(frozen=True)
class TrendPoint:
    day: date
    label: str
    mood: Optional[float]
    sleep: Optional[float]

    def to_dict(self) -> dict:
        return {
            "day": self.day.isoformat(),
            "label": self.label,
            "mood": self.mood,
            "sleep": self.sleep,
        }


@dataclass(frozen=True)
class HabitStat:
    habit_id: int
    name: str
    icon: Optional[str]
    completed_days: int
    completion_rate: int
    current_streak: int
    longest_streak: int

    def to_dict(self) -> dict:
        return {
            "habit_id": self.habit_id,
            "name": self.name,
            "icon": self.icon,
            "completed_days": self.completed_days,
            "completion_rate": self.completion_rate,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
        }


@dataclass(frozen=True)
class ActivityItem:
    kind: str
    title: str
    occurred_at: datetime
    label: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "title": self.title,
            "occurred_at": self.occurred_at.isoformat(),
            "label": self.label,
        }


@dataclass
class Dashboard:
    today: date
    trend: list[TrendPoint]
    habits: list[HabitStat]
    activity: list[ActivityItem]
    quote: str
    completions_this_week: int = 0

    @property
    def best_current_streak(self) -> int:
        return max((stat.current_streak for stat in self.habits), default=0)

    @property
    def average_mood(self) -> Optional[float]:
        return _mean([point.mood for point in self.trend if point.mood is not None])

    @property
    def average_sleep(self) -> Optional[float]:
        return _mean([point.sleep for point in self.trend if point.sleep is not None])

    def to_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "quote": self.quote,
            "best_current_streak": self.best_current_streak,
            "average_mood": self.average_mood,
            "average_sleep": self.average_sleep,
            "completions_this_week": self.completions_this_week,
            "trend": [point.to_dict() for point in self.trend],
            "habits": [stat.to_dict() for stat in self.habits],
            "activity": [item.to_dict() for item in self.activity],
        }


def _local_midnight_utc(day: date, tz: Optional[tzinfo]) -> datetime:
    """Start of ``day`` in local time, converted to UTC."""

    start = datetime.combine(day, time.min)
    start = start.replace(tzinfo=tz) if tz is not None else start.astimezone()
    return start.astimezone(timezone.utc)


def mood_trend(
    repo: MoodRepository,
    *,
    user_id: int,
    today: date,
    tz: Optional[tzinfo] = None,
    days: int = TREND_DAYS,
) -> list[TrendPoint]:
    """Average mood and sleep for each of the trailing ``days`` days."""

    first_day = today - timedelta(days=days - 1)
    moods: dict[date, list[float]] = defaultdict(list)
    sleep: dict[date, list[float]] = defaultdict(list)
    for checkin in repo.list_since(_local_midnight_utc(first_day, tz), user_id=user_id):
        day = to_local(checkin.created_at, tz).date()
        moods[day].append(float(checkin.mood_score))
        sleep[day].append(float(checkin.sleep_hours))

    points = []
    for offset in range(days):
        day = first_day + timedelta(days=offset)
        points.append(
            TrendPoint(day=day, label=f"{day:%a}", mood=_mean(moods[day]), sleep=_mean(sleep[day]))
        )
    return points


def habit_stats(
    store: HabitStore,
    *,
    user_id: int,
    today: date,
    window_days: int = COMPLETION_WINDOW_DAYS,
) -> list[HabitStat]:
    """Completion rate and streaks per habit over the trailing window."""

    start = today - timedelta(days=window_days - 1)
    dates_by_habit: dict[int, set[date]] = defaultdict(set)
    for record in store.completions_between(start, today, user_id=user_id):
        dates_by_habit[record.habit_id].add(record.completed_date)

    stats = []
    for habit in store.list_habits(user_id=user_id):
        dates = dates_by_habit.get(habit.id, set())
        current, longest = compute_streaks(dates, today=today)
        stats.append(
            HabitStat(
                habit_id=habit.id,
                name=habit.name,
                icon=habit.icon,
                completed_days=len(dates),
                completion_rate=round(len(dates) * 100 / window_days),
                current_streak=current,
                longest_streak=longest,
            )
        )
    return stats


def recent_activity(
    store: HabitStore,
    moods: MoodRepository,
    reflections: ReflectionRepository,
    *,
    user_id: int,
    now: datetime,
    tz: Optional[tzinfo] = None,
    limit: int = ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """Latest completions, check-ins and reflections merged newest first."""

    today = to_local(now, tz).date()
    names = {habit.id: habit.name for habit in store.list_habits(user_id=user_id)}
    items: list[ActivityItem] = []

    completions = store.completions_between(
        today - timedelta(days=TREND_DAYS - 1), today, user_id=user_id
    )
    for record in completions:
        # Completions carry a date only; place them at local midnight.
        occurred = datetime.combine(record.completed_date, time.min)
        occurred = occurred.replace(tzinfo=tz) if tz is not None else occurred.astimezone()
        if record.completed_date == today:
            label = "Today"
        else:
            label = relative_time(occurred, now)
        items.append(
            ActivityItem(
                kind="habit",
                title=f"Completed {names.get(record.habit_id, 'a habit')}",
                occurred_at=occurred,
                label=label,
            )
        )

    for checkin in moods.list_recent(user_id=user_id, limit=limit):
        occurred = to_local(checkin.created_at, tz)
        items.append(
            ActivityItem(
                kind="mood",
                title=f"Mood check-in: {checkin.mood_score}/10",
                occurred_at=occurred,
                label=relative_time(occurred, now),
            )
        )

    for reflection in reflections.list_recent(user_id=user_id, limit=limit):
        occurred = to_local(reflection.created_at, tz)
        items.append(
            ActivityItem(
                kind="reflection",
                title=f"Reflected on {reflection.category}",
                occurred_at=occurred,
                label=relative_time(occurred, now),
            )
        )

    items.sort(key=lambda item: item.occurred_at, reverse=True)
    return items[:limit]


def build_dashboard(
    store: HabitStore,
    moods: MoodRepository,
    reflections: ReflectionRepository,
    *,
    user_id: int,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> Dashboard:
    today = to_local(now, tz).date()
    week_start = today - timedelta(days=TREND_DAYS - 1)
    completions_this_week = len(store.completions_between(week_start, today, user_id=user_id))
    return Dashboard(
        today=today,
        trend=mood_trend(moods, user_id=user_id, today=today, tz=tz),
        habits=habit_stats(store, user_id=user_id, today=today),
        activity=recent_activity(store, moods, reflections, user_id=user_id, now=now, tz=tz),
        quote=quote_of_the_day(today),
        completions_this_week=completions_this_week,
    )
