"""
Record selection for report computations.

Pure filters: each returns a new list preserving input order. Empty input yields empty
output, never an error.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from pos_analytics.domain.product import ProductRecord
from pos_analytics.domain.transaction import TransactionRecord, TransactionStatus
from pos_analytics.domain.window import DateWindow


def transactions_in_window(
    records: Iterable[TransactionRecord],
    window: DateWindow,
    status: Optional[TransactionStatus] = None,
) -> List[TransactionRecord]:
    return [
        t
        for t in records
        if window.contains(t.created_at) and (status is None or t.status == status)
    ]


def transactions_for_operator(records: Iterable[TransactionRecord], operator_id: str) -> List[TransactionRecord]:
    return [t for t in records if t.operator_id == operator_id]


def transactions_since(records: Iterable[TransactionRecord], instant: datetime) -> List[TransactionRecord]:
    """Open-ended filter: created_at >= instant."""

    return [t for t in records if t.created_at >= instant]


def completed(records: Iterable[TransactionRecord]) -> List[TransactionRecord]:
    return [t for t in records if t.is_completed]


def active_products(records: Iterable[ProductRecord]) -> List[ProductRecord]:
    return [p for p in records if p.is_active]


__all__ = [
    "active_products",
    "completed",
    "transactions_for_operator",
    "transactions_in_window",
    "transactions_since",
]
