"""
In-memory repositories.

Hold plain lists/dicts of domain records. Used by the test suite, by the CLI demo mode
and by callers that already have snapshots loaded. Every call returns a fresh list so
callers cannot mutate repository state.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from pos_analytics.domain.product import ProductRecord
from pos_analytics.domain.transaction import TransactionRecord, TransactionStatus
from pos_analytics.domain.window import DateWindow


class InMemoryTransactionRepository:
    def __init__(self, transactions: Iterable[TransactionRecord] = ()):
        self._transactions: List[TransactionRecord] = list(transactions)

    def add(self, transaction: TransactionRecord) -> None:
        self._transactions.append(transaction)

    def query(
        self,
        window: Optional[DateWindow],
        status: Optional[TransactionStatus] = None,
        operator_id: Optional[str] = None,
    ) -> List[TransactionRecord]:
        return [
            t
            for t in self._transactions
            if (window is None or window.contains(t.created_at))
            and (status is None or t.status == status)
            and (operator_id is None or t.operator_id == operator_id)
        ]


class InMemoryProductRepository:
    def __init__(self, products: Iterable[ProductRecord] = ()):
        self._products: Dict[str, ProductRecord] = {p.product_id: p for p in products}

    def add(self, product: ProductRecord) -> None:
        self._products[product.product_id] = product

    def active_snapshot(self) -> List[ProductRecord]:
        return [p for p in self._products.values() if p.is_active]

    def by_id(self, product_id: str) -> Optional[ProductRecord]:
        # Inactive products still resolve: historical sales keep their names.
        return self._products.get(product_id)


class InMemoryOperatorRepository:
    def __init__(self, names: Optional[Mapping[str, str]] = None):
        self._names: Dict[str, str] = dict(names or {})

    def display_name(self, operator_id: str) -> Optional[str]:
        return self._names.get(operator_id)


__all__ = [
    "InMemoryOperatorRepository",
    "InMemoryProductRepository",
    "InMemoryTransactionRepository",
]
