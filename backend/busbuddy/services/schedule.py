import math
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from ..config import settings

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def _runs_on(schedule, day: str) -> bool:
    days = schedule.days_of_week
    return not days or day in days


def _earliest(schedules) -> str | None:
    ordered = sorted(schedules, key=lambda s: s.departure_time)
    return ordered[0].departure_time if ordered else None


def next_scheduled_arrival(schedules, now: datetime | None = None) -> str | None:
    """Next "HH:MM" departure among `schedules`, rolling over to tomorrow's first bus."""
    if not schedules:
        return None
    now = now or local_now()
    current = now.strftime("%H:%M")
    today = WEEKDAYS[now.weekday()]
    tomorrow = WEEKDAYS[(now.weekday() + 1) % 7]

    active = [s for s in schedules if s.is_active]
    upcoming = [s for s in active if _runs_on(s, today) and s.departure_time > current]
    if upcoming:
        return _earliest(upcoming)

    return _earliest([s for s in active if _runs_on(s, tomorrow)]) or _earliest(active)


def minutes_until(time_of_day: str, now: datetime | None = None) -> int:
    now = now or local_now()
    hours, minutes = (int(part) for part in time_of_day.split(":"))
    target = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if target < now:
        target += timedelta(days=1)
    return math.floor((target - now).total_seconds() / 60)
