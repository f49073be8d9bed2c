"""
Tests for `services/trend.py`.

Covers contract rules:
- The series always has exactly `days` entries, oldest first, ending at the reference date.
- Days without completed transactions are 0 (zero-fill), never omitted.
- Only completed transactions count.
- Buckets use the inclusive single-day window in the reporting timezone.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from factories import at, txn

from pos_analytics.domain.transaction import TransactionStatus
from pos_analytics.services.trend import daily_series, trend_window

REFERENCE = date(2025, 1, 15)


@pytest.mark.parametrize(
    "records",
    [
        [],
        [txn("a", "10", created_at=at(2024, 6, 1))],
        [txn(f"t-{i}", "1", created_at=at(2025, 1, 9 + i)) for i in range(7)],
    ],
)
def test_series_length_is_always_days(records: list) -> None:
    assert len(daily_series(records, 7, REFERENCE)) == 7


def test_single_sale_today_lands_in_last_slot() -> None:
    """Single completed 200 today -> six 0s then 200."""

    records = [txn("a", "200", created_at=at(2025, 1, 15, 9))]

    series = daily_series(records, 7, REFERENCE)

    assert [p.sales for p in series] == [Decimal("0")] * 6 + [Decimal("200")]
    assert series[-1].day == REFERENCE
    assert series[0].day == date(2025, 1, 9)


def test_labels_are_short_weekdays_oldest_first() -> None:
    series = daily_series([], 7, REFERENCE)

    assert [p.label for p in series] == ["Thu", "Fri", "Sat", "Sun", "Mon", "Tue", "Wed"]


def test_only_completed_transactions_count() -> None:
    records = [
        txn("c", "50", created_at=at(2025, 1, 14)),
        txn("p", "70", created_at=at(2025, 1, 14), status=TransactionStatus.PENDING),
        txn("r", "90", created_at=at(2025, 1, 14), status=TransactionStatus.REFUNDED),
    ]

    series = daily_series(records, 2, REFERENCE)

    assert [p.sales for p in series] == [Decimal("50"), Decimal("0")]


def test_day_boundaries_are_inclusive() -> None:
    records = [
        txn("end-of-day", "5", created_at=at(2025, 1, 14, 23, 59, 59, 500000)),
        txn("start-of-day", "7", created_at=at(2025, 1, 15, 0, 0, 0)),
    ]

    series = daily_series(records, 2, REFERENCE)

    assert [p.sales for p in series] == [Decimal("5"), Decimal("7")]


def test_buckets_follow_reporting_timezone() -> None:
    """22:00 UTC on the 14th is already the 15th in Manila (UTC+8)."""

    records = [txn("a", "10", created_at=at(2025, 1, 14, 22))]

    series = daily_series(records, 2, REFERENCE, ZoneInfo("Asia/Manila"))

    assert [p.sales for p in series] == [Decimal("0"), Decimal("10")]


def test_zero_and_negative_days() -> None:
    assert daily_series([], 0, REFERENCE) == []
    with pytest.raises(ValueError):
        daily_series([], -1, REFERENCE)


def test_trend_window_covers_series() -> None:
    window = trend_window(7, REFERENCE)

    assert window.contains(at(2025, 1, 9, 0, 0))
    assert window.contains(at(2025, 1, 15, 23, 59, 59))
    assert not window.contains(at(2025, 1, 8, 23, 59, 59))
