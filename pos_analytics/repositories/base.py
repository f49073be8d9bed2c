"""
Collaborator contracts consumed by the analytics engine.

The engine only reads immutable snapshots through these protocols. Implementations own
persistence, retries and connectivity; any exception they raise propagates unchanged
through the report service.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from pos_analytics.domain.product import ProductRecord
from pos_analytics.domain.transaction import TransactionRecord, TransactionStatus
from pos_analytics.domain.window import DateWindow


class TransactionRepository(Protocol):
    def query(
        self,
        window: Optional[DateWindow],
        status: Optional[TransactionStatus] = None,
        operator_id: Optional[str] = None,
    ) -> List[TransactionRecord]:
        """
        Transactions matching the filters.

        window=None means no time bound.
        """
        ...


class ProductRepository(Protocol):
    def active_snapshot(self) -> List[ProductRecord]:
        ...

    def by_id(self, product_id: str) -> Optional[ProductRecord]:
        ...


class OperatorRepository(Protocol):
    def display_name(self, operator_id: str) -> Optional[str]:
        """'First Last' for a cashier, or None if unknown."""
        ...


__all__ = ["OperatorRepository", "ProductRepository", "TransactionRepository"]
