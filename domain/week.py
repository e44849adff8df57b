"""
Calendar helpers for week plans.

A week plan is identified by the ISO-8601 week of its Monday, e.g. ``2024-W03``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Union

DAY_NAMES = [
    "Montag",
    "Dienstag",
    "Mittwoch",
    "Donnerstag",
    "Freitag",
    "Samstag",
    "Sonntag",
]

DAYS_PER_WEEK = 7

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string (``2024-01-15`` or ``2024-01-15T00:00:00Z``)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot interpret {value!r} as a date")


def monday_of(value: DateLike) -> date:
    d = to_date(value)
    return d - timedelta(days=d.weekday())


def week_id(value: DateLike) -> str:
    """ISO year-week string of the week containing ``value``."""
    iso_year, iso_week, _ = to_date(value).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def day_name(value: DateLike) -> str:
    return DAY_NAMES[to_date(value).weekday()]


def shift_weeks(value: DateLike, weeks: int) -> date:
    return monday_of(value) + timedelta(weeks=weeks)


def empty_days(monday: DateLike) -> List[Dict[str, Any]]:
    """Seven day entries starting at ``monday`` with no meals assigned."""
    start = monday_of(monday)
    days = []
    for offset in range(DAYS_PER_WEEK):
        d = start + timedelta(days=offset)
        days.append({"date": d.isoformat(), "dayName": DAY_NAMES[offset], "meals": {}})
    return days


def empty_week_plan(monday: DateLike) -> Dict[str, Any]:
    start = monday_of(monday)
    return {
        "id": week_id(start),
        "startDate": start.isoformat(),
        "days": empty_days(start),
    }
