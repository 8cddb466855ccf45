# backend/coachplan/scheduling/calendar.py
from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from coachplan.config import APP_TZ

DAY_NAMES = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]

# Location keywords that mark a dry-land (gym / PPG) session rather than a pool one
_SWIM_WORDS = ("piscine", "bassin")
_DRYLAND_WORDS = ("salle", "muscu", "ppg", "gym")


def minutes_of(t: time) -> float:
    return t.hour * 60 + t.minute + t.second / 60


def floor_hour(t: time) -> int:
    return t.hour


def ceil_hour(t: time) -> int:
    return math.ceil(minutes_of(t) / 60)


def today(tz_name: str = APP_TZ) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def monday_of_week(day: date, offset: int = 0) -> date:
    """Monday of the week containing `day`; offset=+1 is next week, -1 the previous one."""
    return day - timedelta(days=day.isoweekday() - 1) + timedelta(weeks=offset)


def iso_week_number(day: date) -> int:
    return day.isocalendar()[1]


def day_name(day_of_week: int) -> str:
    return DAY_NAMES[day_of_week - 1]


def session_kind(location: str) -> str:
    """'swim' for pool sessions, 'dryland' for gym / PPG ones."""
    loc = location.lower()
    if any(w in loc for w in _SWIM_WORDS):
        return "swim"
    if any(w in loc for w in _DRYLAND_WORDS):
        return "dryland"
    return "swim"
