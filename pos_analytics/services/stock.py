"""
Inventory health: low stock, out of stock, valuation.

The low-stock rule compares each product against its own min_stock_level, so detection
takes a predicate over the whole record rather than a scalar threshold. Inactive
products never appear in any result.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from pos_analytics.domain.product import ProductRecord, is_low_stock, is_out_of_stock

UNCATEGORIZED = "Uncategorized"

StockPredicate = Callable[[ProductRecord], bool]


@dataclass(frozen=True, slots=True)
class LowStockItem:
    product_id: str
    name: str
    current: int
    minimum: int
    category: str


@dataclass(frozen=True, slots=True)
class StockStatusBreakdown:
    """Mutually exclusive counts over active products."""

    healthy: int
    low: int
    out: int


def _to_low_stock_item(product: ProductRecord) -> LowStockItem:
    return LowStockItem(
        product_id=product.product_id,
        name=product.name,
        current=product.stock_quantity,
        minimum=product.min_stock_level,
        category=product.category_id or UNCATEGORIZED,
    )


def low_stock(
    products: Iterable[ProductRecord],
    predicate: StockPredicate = is_low_stock,
    limit: Optional[int] = None,
) -> List[LowStockItem]:
    """
    Active products matching `predicate`, most urgent (lowest stock) first.

    Ties keep input order. `limit` truncates after sorting.
    """

    flagged = [p for p in products if p.is_active and predicate(p)]
    flagged.sort(key=lambda p: p.stock_quantity)
    if limit is not None:
        flagged = flagged[:limit]
    return [_to_low_stock_item(p) for p in flagged]


def out_of_stock(products: Iterable[ProductRecord]) -> List[ProductRecord]:
    return [p for p in products if is_out_of_stock(p)]


def inventory_value(products: Iterable[ProductRecord]) -> Decimal:
    """Sum of price x stock_quantity over active products."""

    return sum((p.stock_value for p in products if p.is_active), Decimal("0"))


def stock_status_breakdown(products: Iterable[ProductRecord]) -> StockStatusBreakdown:
    healthy = low = out = 0
    for product in products:
        if not product.is_active:
            continue
        if is_out_of_stock(product):
            out += 1
        elif is_low_stock(product):
            low += 1
        else:
            healthy += 1
    return StockStatusBreakdown(healthy=healthy, low=low, out=out)


__all__ = [
    "LowStockItem",
    "StockPredicate",
    "StockStatusBreakdown",
    "UNCATEGORIZED",
    "inventory_value",
    "low_stock",
    "out_of_stock",
    "stock_status_breakdown",
]
