"""
Fixed-length daily sales series.

This is the single trend routine for every caller (sales trend, dashboard trailing
week). Each bucket is one local calendar day resolved with DateWindow.for_day; only
completed transactions count, and empty days are reported as 0 so the series always has
exactly `days` entries, oldest first, ending at `reference_date`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, List

from pos_analytics.domain.time import weekday_label
from pos_analytics.domain.transaction import TransactionRecord, TransactionStatus
from pos_analytics.domain.window import DateWindow
from pos_analytics.services.aggregation import total_sales
from pos_analytics.services.record_filter import transactions_in_window


@dataclass(frozen=True, slots=True)
class TrendPoint:
    day: date
    label: str
    sales: Decimal


def daily_series(
    transactions: Iterable[TransactionRecord],
    days: int,
    reference_date: date,
    tz: tzinfo = timezone.utc,
) -> List[TrendPoint]:
    """
    Zero-filled daily completed-sales totals for the `days` days ending at reference_date.

    Raises:
        ValueError: If days is negative
    """

    if days < 0:
        raise ValueError("days must be >= 0")

    records = list(transactions)
    series: List[TrendPoint] = []
    for offset in range(days - 1, -1, -1):
        day = reference_date - timedelta(days=offset)
        bucket = transactions_in_window(records, DateWindow.for_day(day, tz), TransactionStatus.COMPLETED)
        series.append(TrendPoint(day=day, label=weekday_label(day), sales=total_sales(bucket)))
    return series


def trend_window(days: int, reference_date: date, tz: tzinfo = timezone.utc) -> DateWindow:
    """The window a caller must fetch to feed daily_series (days >= 1)."""

    if days < 1:
        raise ValueError("days must be >= 1")
    return DateWindow.from_dates(reference_date - timedelta(days=days - 1), reference_date, tz)


__all__ = ["TrendPoint", "daily_series", "trend_window"]
