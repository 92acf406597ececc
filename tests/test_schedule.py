"""Tests for the scheduled-arrival lookup."""
from datetime import datetime
from types import SimpleNamespace

from busbuddy.services.schedule import WEEKDAYS, minutes_until, next_scheduled_arrival

ALL_DAYS = list(WEEKDAYS)


def _schedule(departure, active=True, days=None):
    return SimpleNamespace(departure_time=departure, is_active=active,
                           days_of_week=ALL_DAYS if days is None else days)


def _at(hour, minute=0, second=0):
    return datetime(2026, 10, 19, hour, minute, second)


class TestNextScheduledArrival:
    def setup_method(self):
        self.schedules = [_schedule("14:00"), _schedule("20:00"), _schedule("08:00")]

    def test_next_departure_later_today(self):
        assert next_scheduled_arrival(self.schedules, now=_at(15)) == "20:00"

    def test_rolls_over_to_first_bus_tomorrow(self):
        assert next_scheduled_arrival(self.schedules, now=_at(21)) == "08:00"

    def test_departure_at_current_minute_is_not_upcoming(self):
        assert next_scheduled_arrival(self.schedules, now=_at(14)) == "20:00"

    def test_inactive_schedules_ignored(self):
        schedules = [_schedule("16:00", active=False), _schedule("18:00"), _schedule("06:00", active=False)]
        assert next_scheduled_arrival(schedules, now=_at(15)) == "18:00"
        assert next_scheduled_arrival(schedules, now=_at(19)) == "18:00"

    def test_empty_or_all_inactive(self):
        assert next_scheduled_arrival([], now=_at(15)) is None
        assert next_scheduled_arrival([_schedule("16:00", active=False)], now=_at(15)) is None

    def test_days_of_week_respected_today(self):
        now = _at(15)
        other_day = WEEKDAYS[(now.weekday() + 3) % 7]
        schedules = [_schedule("16:00", days=[other_day]), _schedule("20:00")]
        assert next_scheduled_arrival(schedules, now=now) == "20:00"

    def test_fallback_prefers_buses_running_tomorrow(self):
        now = _at(21)
        tomorrow = WEEKDAYS[(now.weekday() + 1) % 7]
        not_tomorrow = WEEKDAYS[(now.weekday() + 2) % 7]
        schedules = [_schedule("07:00", days=[not_tomorrow]), _schedule("09:00", days=[tomorrow])]
        assert next_scheduled_arrival(schedules, now=now) == "09:00"

    def test_fallback_without_tomorrow_service_uses_earliest(self):
        now = _at(21)
        later = WEEKDAYS[(now.weekday() + 3) % 7]
        schedules = [_schedule("09:00", days=[later]), _schedule("07:00", days=[later])]
        assert next_scheduled_arrival(schedules, now=now) == "07:00"


class TestMinutesUntil:
    def test_later_today(self):
        assert minutes_until("15:30", now=_at(15)) == 30

    def test_partial_minutes_floor(self):
        assert minutes_until("15:30", now=_at(15, 0, 30)) == 29

    def test_past_time_rolls_to_tomorrow(self):
        assert minutes_until("14:00", now=_at(15)) == 23 * 60

    def test_exactly_now(self):
        assert minutes_until("15:00", now=_at(15)) == 0
