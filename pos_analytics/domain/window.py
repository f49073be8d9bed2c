"""
Domain: Date windows for report queries.

Contract:
- A window is an inclusive range [start, end] of UTC instants.
- Calendar windows resolve local dates to [start 00:00:00.000, end 23:59:59.999] in the
  reporting timezone, so the whole end day is always included.
- start > end is rejected with InvalidRangeError.

This module contains only pure value objects: no I/O, no implicit clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo

from .time import require_utc_timestamp

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)


class InvalidRangeError(ValueError):
    """Raised when a window's start is after its end."""

    def __init__(self, start: object, end: object):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: start {start} is after end {end}")


@dataclass(frozen=True, slots=True)
class DateWindow:
    """
    Immutable inclusive range of UTC instants.

    Construct with `from_dates` for calendar ranges, `for_day` for a single local day,
    or `between` for explicit instants (e.g. month-to-date ending at "now").
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        require_utc_timestamp("start", self.start)
        require_utc_timestamp("end", self.end)
        if self.start > self.end:
            raise InvalidRangeError(self.start, self.end)

    @staticmethod
    def from_dates(start_date: date, end_date: date, tz: tzinfo = timezone.utc) -> "DateWindow":
        """
        Resolve local calendar dates to an inclusive window.

        Raises:
            InvalidRangeError: if start_date > end_date
        """

        if start_date > end_date:
            raise InvalidRangeError(start_date, end_date)

        start = datetime.combine(start_date, START_OF_DAY, tzinfo=tz)
        end = datetime.combine(end_date, END_OF_DAY, tzinfo=tz)
        return DateWindow(
            start=start.astimezone(timezone.utc),
            end=end.astimezone(timezone.utc),
        )

    @staticmethod
    def for_day(day: date, tz: tzinfo = timezone.utc) -> "DateWindow":
        return DateWindow.from_dates(day, day, tz)

    @staticmethod
    def between(start: datetime, end: datetime) -> "DateWindow":
        """Window between two aware instants (converted to UTC)."""

        if start.tzinfo is None or end.tzinfo is None:
            raise ValueError("window bounds must be timezone-aware")
        return DateWindow(
            start=start.astimezone(timezone.utc),
            end=end.astimezone(timezone.utc),
        )

    def contains(self, value: datetime) -> bool:
        return self.start <= value <= self.end


__all__ = [
    "DateWindow",
    "END_OF_DAY",
    "InvalidRangeError",
    "START_OF_DAY",
]
