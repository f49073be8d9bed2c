"""
Demo dataset for trying the reports without a database.

Products mirror the store's seed catalogue; transactions are generated deterministically
over the week leading up to `now`.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Tuple

from pos_analytics.domain.product import ProductRecord
from pos_analytics.domain.transaction import LineItem, TransactionRecord, TransactionStatus
from pos_analytics.repositories.memory import (
    InMemoryOperatorRepository,
    InMemoryProductRepository,
    InMemoryTransactionRepository,
)

DEMO_PRODUCTS: Tuple[ProductRecord, ...] = (
    ProductRecord("prod-coffee", "Premium Coffee Beans", Decimal("15.99"), Decimal("8.50"), 50, 10, barcode="1234567890123"),
    ProductRecord("prod-milk", "Organic Milk", Decimal("4.99"), Decimal("2.50"), 4, 5, barcode="9876543210987"),
    ProductRecord("prod-bread", "Fresh Bread", Decimal("3.49"), Decimal("1.20"), 0, 5, barcode="5555555555555"),
    ProductRecord("prod-energy", "Energy Drink", Decimal("2.99"), Decimal("1.50"), 100, 20, barcode="1111111111111"),
)

DEMO_OPERATORS = {
    "user-cashier": "John Cashier",
    "user-manager": "Jane Manager",
}


def _line(product: ProductRecord, quantity: int) -> LineItem:
    return LineItem(
        product_id=product.product_id,
        quantity=quantity,
        unit_price=product.price,
        line_total=product.price * quantity,
    )


def demo_transactions(now: datetime) -> List[TransactionRecord]:
    """Two sales per day for the last 7 days, plus one pending and one refunded sale today."""

    coffee, milk, bread, energy = DEMO_PRODUCTS
    now = now.astimezone(timezone.utc)
    transactions: List[TransactionRecord] = []

    for day in range(7):
        at = now - timedelta(days=day, hours=1)
        for n, (operator, lines) in enumerate(
            (
                ("user-cashier", (_line(coffee, 1), _line(milk, 2))),
                ("user-manager", (_line(energy, 3 + day % 2), _line(bread, 1))),
            )
        ):
            transactions.append(
                TransactionRecord(
                    transaction_id=f"TXN-{day}-{n}",
                    created_at=at - timedelta(minutes=30 * n),
                    total_amount=sum((line.line_total for line in lines), Decimal("0")),
                    status=TransactionStatus.COMPLETED,
                    operator_id=operator,
                    line_items=lines,
                )
            )

    for status in (TransactionStatus.PENDING, TransactionStatus.REFUNDED):
        lines = (_line(coffee, 2),)
        transactions.append(
            TransactionRecord(
                transaction_id=f"TXN-{status.value}",
                created_at=now - timedelta(minutes=5),
                total_amount=lines[0].line_total,
                status=status,
                operator_id="user-cashier",
                line_items=lines,
            )
        )
    return transactions


def demo_repositories(
    now: datetime,
) -> Tuple[InMemoryTransactionRepository, InMemoryProductRepository, InMemoryOperatorRepository]:
    return (
        InMemoryTransactionRepository(demo_transactions(now)),
        InMemoryProductRepository(DEMO_PRODUCTS),
        InMemoryOperatorRepository(DEMO_OPERATORS),
    )


__all__ = ["DEMO_OPERATORS", "DEMO_PRODUCTS", "demo_repositories", "demo_transactions"]
