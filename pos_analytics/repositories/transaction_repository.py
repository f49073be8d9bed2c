"""
Transaction repository (Supabase).

Read-only access to the legacy `transactions` / `transaction_items` tables. This module
only fetches and maps rows; it does not aggregate. Columns use the legacy camelCase
names.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from supabase import Client

from pos_analytics.domain.transaction import LineItem, TransactionRecord, TransactionStatus
from pos_analytics.domain.window import DateWindow
from pos_analytics.repositories.client import get_supabase
from pos_analytics.repositories.paging import fetch_all_rows

# Supabase table names. Keep these aligned with the database schema.
_TRANSACTIONS_TABLE: str = "transactions"
_ITEMS_TABLE: str = "transaction_items"


def _parse_utc_datetime(value: Any) -> datetime:
    """
    Parse a Supabase timestamp into a timezone-aware UTC datetime.

    Supabase commonly returns ISO-8601 strings, sometimes with a trailing 'Z'.
    Naive values are assumed to be UTC.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_decimal(name: str, value: Any) -> Decimal:
    if value is None:
        raise ValueError(f"{name} is required")
    # str() first so floats from JSON keep their printed value
    return Decimal(str(value))


def _to_int(name: str, value: Any) -> int:
    if value is None:
        raise ValueError(f"{name} is required")
    return int(value)


def _row_to_line_item(row: Mapping[str, Any]) -> LineItem:
    return LineItem(
        product_id=str(row["productId"]),
        quantity=_to_int("quantity", row["quantity"]),
        unit_price=_to_decimal("unitPrice", row["unitPrice"]),
        line_total=_to_decimal("totalPrice", row["totalPrice"]),
    )


def _row_to_transaction(row: Mapping[str, Any]) -> TransactionRecord:
    """Convert a Supabase row (with embedded items) into a TransactionRecord."""

    return TransactionRecord(
        transaction_id=str(row["id"]),
        created_at=_parse_utc_datetime(row["createdAt"]),
        total_amount=_to_decimal("totalAmount", row["totalAmount"]),
        status=TransactionStatus.parse(str(row["status"])),
        operator_id=str(row.get("cashierId") or ""),
        line_items=tuple(_row_to_line_item(item) for item in row.get("items") or []),
        operator_name=row.get("cashierName"),
    )


class SupabaseTransactionRepository:
    """TransactionRepository backed by Supabase."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def query(
        self,
        window: Optional[DateWindow],
        status: Optional[TransactionStatus] = None,
        operator_id: Optional[str] = None,
    ) -> List[TransactionRecord]:
        """
        Fetch every matching transaction with its line items, newest first.

        Rows are read in pages so the result is never truncated at the server's
        max-rows limit.

        Raises:
            RuntimeError: If Supabase reports an error
            ValueError: If a row is missing a required amount or quantity
        """

        def build_query():
            query = self.client.table(_TRANSACTIONS_TABLE).select(f"*, items:{_ITEMS_TABLE}(*)")

            if window is not None:
                query = query.gte("createdAt", window.start.isoformat()).lte("createdAt", window.end.isoformat())
            if status is not None:
                query = query.eq("status", status.value)
            if operator_id is not None:
                query = query.eq("cashierId", operator_id)

            # id breaks createdAt ties so pages do not overlap
            return query.order("createdAt", desc=True).order("id")

        rows = fetch_all_rows(build_query, "query transactions")
        return [_row_to_transaction(row) for row in rows]


__all__ = ["SupabaseTransactionRepository"]
