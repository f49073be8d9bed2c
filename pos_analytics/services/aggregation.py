"""
Rollups over a filtered transaction set.

All money arithmetic is Decimal. No rounding happens here; the average is exactly
sum / count (0 for an empty set). Callers filter by status first: these functions sum
whatever they are given.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from pos_analytics.domain.transaction import TransactionRecord

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class Rollup:
    total: Decimal
    count: int
    average: Decimal


def total_sales(transactions: Iterable[TransactionRecord]) -> Decimal:
    return sum((t.total_amount for t in transactions), ZERO)


def transaction_count(transactions: Sequence[TransactionRecord]) -> int:
    return len(transactions)


def average_transaction(transactions: Sequence[TransactionRecord]) -> Decimal:
    """sum / count, defined as 0 when the set is empty."""

    count = transaction_count(transactions)
    if count == 0:
        return ZERO
    return total_sales(transactions) / count


def summarize(transactions: Sequence[TransactionRecord]) -> Rollup:
    total = total_sales(transactions)
    count = transaction_count(transactions)
    return Rollup(total=total, count=count, average=total / count if count else ZERO)


def units_sold(transactions: Iterable[TransactionRecord]) -> int:
    """Sum of line item quantities."""

    return sum(t.units for t in transactions)


def distinct_operators(transactions: Iterable[TransactionRecord]) -> int:
    return len({t.operator_id for t in transactions})


__all__ = [
    "Rollup",
    "ZERO",
    "average_transaction",
    "distinct_operators",
    "summarize",
    "total_sales",
    "transaction_count",
    "units_sold",
]
