"""
Domain time utilities (pure).

Centralized timestamp validation and local-calendar helpers.

Record timestamps are always stored as UTC. Calendar concepts ("today", "this week",
"this month") are evaluated in the reporting timezone, which is passed explicitly.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

# Short weekday labels, indexed by date.weekday() (Monday == 0).
# Fixed strings so trend labels do not depend on the process locale.
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces the contract requirement that timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def local_date(value: datetime, tz: tzinfo) -> date:
    """Calendar date of an aware timestamp as seen in `tz`."""

    if value.tzinfo is None:
        raise ValueError("value must be timezone-aware")
    return value.astimezone(tz).date()


def week_start(day: date) -> date:
    """
    First day of the week containing `day`.

    Weeks start on Sunday (local calendar).
    """

    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_start(day: date) -> date:
    return day.replace(day=1)


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]


__all__ = [
    "WEEKDAY_LABELS",
    "local_date",
    "month_start",
    "require_utc_timestamp",
    "week_start",
    "weekday_label",
]
