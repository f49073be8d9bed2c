"""
Domain: Sales transactions.

Contract excerpts implemented here:
- A transaction has a UTC creation timestamp, a total amount, a status and the
  operator (cashier) who processed it, plus an ordered list of line items.
- Only `completed` transactions participate in sales metrics. `pending` and `refunded`
  transactions are excluded from revenue but may appear in activity listings.
- total_amount is expected to equal the sum of line totals. This is NOT enforced here;
  enforcement belongs to whatever creates transactions. `is_consistent` exposes it.

Records are immutable snapshots owned by the persistence layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .time import require_utc_timestamp


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"

    @classmethod
    def parse(cls, value: str) -> "TransactionStatus":
        """Case-insensitive lookup (legacy clients send 'Completed')."""

        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown transaction status: {value!r}") from None


@dataclass(frozen=True, slots=True)
class LineItem:
    """A single product line on a transaction."""

    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """
    Immutable snapshot of a sales transaction.

    operator_name is the denormalised cashier name some rows carry; report code prefers
    the operator directory and only falls back to it.
    """

    transaction_id: str
    created_at: datetime
    total_amount: Decimal
    status: TransactionStatus
    operator_id: str
    line_items: Tuple[LineItem, ...] = field(default_factory=tuple)
    operator_name: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        if not isinstance(self.line_items, tuple):
            # frozen: bypass __setattr__ to normalise list input
            object.__setattr__(self, "line_items", tuple(self.line_items))

    @property
    def is_completed(self) -> bool:
        return self.status is TransactionStatus.COMPLETED

    @property
    def item_count(self) -> int:
        """Number of line items (not units)."""
        return len(self.line_items)

    @property
    def units(self) -> int:
        return sum(item.quantity for item in self.line_items)

    @property
    def line_items_total(self) -> Decimal:
        return sum((item.line_total for item in self.line_items), Decimal("0"))

    @property
    def is_consistent(self) -> bool:
        """True iff total_amount equals the sum of line totals."""
        return self.total_amount == self.line_items_total


__all__ = ["LineItem", "TransactionRecord", "TransactionStatus"]
