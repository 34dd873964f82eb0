"""Calendar helpers shared by the habit, tracker and reflection services."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def resolve_timezone(tz_name: Optional[str]) -> Optional[tzinfo]:
    """Return the named zone, or ``None`` for the server's local time."""

    if not tz_name:
        return None
    return ZoneInfo(tz_name)


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def local_today(tz: Optional[tzinfo] = None) -> date:
    """Today's calendar date in ``tz`` (server local time when omitted)."""

    return local_now(tz).date()


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a stored timestamp to local time; naive values are UTC."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz) if tz is not None else moment.astimezone()


def week_start(day: date) -> date:
    """First day (Sunday) of the week containing ``day``."""

    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_end(day: date) -> date:
    return week_start(day) + timedelta(days=6)


def short_date(day: date) -> str:
    """Format like ``Jan 9`` (no zero padding)."""

    return f"{day:%b} {day.day}"


def day_label(moment: datetime, today: date, tz: Optional[tzinfo] = None) -> str:
    """``Today``, ``Yesterday`` or the calendar date of a stored timestamp."""

    day = to_local(moment, tz).date()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return day.isoformat()


def relative_time(moment: datetime, now: datetime) -> str:
    """Coarse "N units ago" label used by the activity feed."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    seconds = max(int((now - moment).total_seconds()), 0)
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"
