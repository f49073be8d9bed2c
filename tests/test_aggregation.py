"""
Tests for `services/aggregation.py`.

Covers contract rules:
- count(empty) = 0 and average(empty) = 0 (no division fault).
- sum = total of total_amount, average = sum / count exactly.
- average x count reproduces sum for non-empty sets.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from factories import item, txn

from pos_analytics.services.aggregation import (
    average_transaction,
    distinct_operators,
    summarize,
    total_sales,
    transaction_count,
    units_sold,
)


def test_empty_set_rollups_are_zero() -> None:
    assert total_sales([]) == Decimal("0")
    assert transaction_count([]) == 0
    assert average_transaction([]) == Decimal("0")

    rollup = summarize([])
    assert (rollup.total, rollup.count, rollup.average) == (Decimal("0"), 0, Decimal("0"))


def test_sum_count_average() -> None:
    records = [txn("a", "100"), txn("b", "25")]

    assert total_sales(records) == Decimal("125")
    assert transaction_count(records) == 2
    assert average_transaction(records) == Decimal("62.5")


@pytest.mark.parametrize(
    "totals",
    [
        ["10.00"],
        ["0.01", "0.02", "0.04"],
        ["19.99", "5.01", "3.49", "100.00", "0.00"],
        ["1", "1", "1"],
    ],
)
def test_average_times_count_matches_sum(totals: list) -> None:
    records = [txn(f"t-{i}", total) for i, total in enumerate(totals)]
    rollup = summarize(records)

    assert rollup.average == rollup.total / rollup.count
    assert abs(rollup.average * rollup.count - rollup.total) < Decimal("0.000001")
    assert rollup.average == average_transaction(records)


def test_units_and_distinct_operators() -> None:
    records = [
        txn("a", "30", operator_id="op-1", items=[item("p-1", 3, "10")]),
        txn("b", "20", operator_id="op-2", items=[item("p-1", 2, "10")]),
        txn("c", "5", operator_id="op-1", items=[item("p-2", 1, "5")]),
    ]

    assert units_sold(records) == 6
    assert distinct_operators(records) == 2
    assert distinct_operators([]) == 0
