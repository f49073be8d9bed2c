"""
Tests for `domain/window.py` and `domain/time.py`.

Covers contract rules:
- Calendar windows run from 00:00:00.000 on the start date to 23:59:59.999 on the end date.
- A timestamp at 23:59:59.500 on the end date is included; 00:00:00.001 the next day is not.
- start > end raises InvalidRangeError (a ValueError).
- Local dates are resolved in the reporting timezone, bounds are stored as UTC.
- Weeks start on Sunday.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from factories import at

from pos_analytics.domain.time import local_date, month_start, require_utc_timestamp, week_start, weekday_label
from pos_analytics.domain.window import DateWindow, InvalidRangeError


def test_from_dates_resolves_full_end_day() -> None:
    """Verify the window spans start-of-day to 23:59:59.999 on the end day."""

    window = DateWindow.from_dates(date(2025, 1, 1), date(2025, 1, 31))

    assert window.start == at(2025, 1, 1, 0, 0, 0)
    assert window.end == at(2025, 1, 31, 23, 59, 59, 999000)


def test_end_boundary_inclusion() -> None:
    """Verify 23:59:59.500 on the end date is in, 00:00:00.001 the next day is out."""

    window = DateWindow.from_dates(date(2025, 1, 1), date(2025, 1, 2))

    assert window.contains(at(2025, 1, 2, 23, 59, 59, 500000))
    assert not window.contains(at(2025, 1, 3, 0, 0, 0, 1000))


def test_start_boundary_inclusion() -> None:
    window = DateWindow.from_dates(date(2025, 1, 2), date(2025, 1, 2))

    assert window.contains(at(2025, 1, 2, 0, 0, 0))
    assert not window.contains(at(2025, 1, 1, 23, 59, 59, 999000))


def test_start_after_end_raises_invalid_range() -> None:
    with pytest.raises(InvalidRangeError):
        DateWindow.from_dates(date(2025, 1, 2), date(2025, 1, 1))

    # Still a ValueError for callers that only catch the builtin
    with pytest.raises(ValueError):
        DateWindow.from_dates(date(2025, 1, 2), date(2025, 1, 1))


def test_same_day_window_is_valid() -> None:
    window = DateWindow.for_day(date(2025, 3, 9))

    assert window.start < window.end


def test_local_timezone_window_is_stored_in_utc() -> None:
    """Verify a Manila calendar day (UTC+8) maps to the previous UTC evening."""

    manila = ZoneInfo("Asia/Manila")
    window = DateWindow.for_day(date(2025, 1, 15), manila)

    assert window.start == at(2025, 1, 14, 16, 0, 0)
    assert window.end == at(2025, 1, 15, 15, 59, 59, 999000)
    assert window.start.utcoffset() == timedelta(0)


def test_between_requires_aware_bounds() -> None:
    with pytest.raises(ValueError):
        DateWindow.between(datetime(2025, 1, 1), at(2025, 1, 2))


def test_window_rejects_non_utc_bounds() -> None:
    plus_two = timezone(timedelta(hours=2))

    with pytest.raises(ValueError):
        DateWindow(start=datetime(2025, 1, 1, tzinfo=plus_two), end=at(2025, 1, 2))


def test_between_converts_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    window = DateWindow.between(datetime(2025, 1, 1, 2, 0, tzinfo=plus_two), at(2025, 1, 2))

    assert window.start == at(2025, 1, 1, 0, 0)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2025, 1, 12), date(2025, 1, 12)),  # Sunday
        (date(2025, 1, 13), date(2025, 1, 12)),  # Monday
        (date(2025, 1, 18), date(2025, 1, 12)),  # Saturday
        (date(2025, 1, 1), date(2024, 12, 29)),  # Wednesday across a year boundary
    ],
)
def test_week_start_is_sunday(day: date, expected: date) -> None:
    assert week_start(day) == expected


def test_month_start_and_weekday_label() -> None:
    assert month_start(date(2025, 2, 27)) == date(2025, 2, 1)
    assert weekday_label(date(2025, 1, 15)) == "Wed"
    assert weekday_label(date(2025, 1, 12)) == "Sun"


def test_local_date_uses_timezone() -> None:
    late_utc = at(2025, 1, 15, 20, 0)

    assert local_date(late_utc, ZoneInfo("Asia/Manila")) == date(2025, 1, 16)
    assert local_date(late_utc, timezone.utc) == date(2025, 1, 15)


def test_require_utc_timestamp() -> None:
    require_utc_timestamp("ts", at(2025, 1, 1))

    with pytest.raises(ValueError):
        require_utc_timestamp("ts", datetime(2025, 1, 1))
