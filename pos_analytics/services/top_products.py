"""
Top-N product ranking.

Algorithm:
1. Group line items across all given transactions by product id, in the order each
   product id is first encountered.
2. Per group, total revenue = sum of line totals, total units = sum of quantities.
3. Sort descending by the chosen metric. The sort is stable, so exact ties keep their
   first-encountered order; no secondary key is applied.
4. Truncate to `limit`.
5. Resolve display names through `product_lookup`; unknown ids are labelled
   "Unknown Product" and still keep their revenue and units.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from pos_analytics.domain.product import ProductRecord
from pos_analytics.domain.transaction import TransactionRecord

UNKNOWN_PRODUCT = "Unknown Product"

ProductLookup = Callable[[str], Optional[ProductRecord]]


class RankMetric(str, Enum):
    REVENUE = "revenue"
    UNITS = "units"


@dataclass(frozen=True, slots=True)
class ProductRanking:
    product_id: str
    name: str
    total_revenue: Decimal
    total_units: int


@dataclass(slots=True)
class _ProductTotals:
    revenue: Decimal
    units: int


def group_line_items(transactions: Iterable[TransactionRecord]) -> Dict[str, _ProductTotals]:
    """Per-product totals keyed by product id, in first-encountered order."""

    groups: Dict[str, _ProductTotals] = {}
    for transaction in transactions:
        for item in transaction.line_items:
            totals = groups.get(item.product_id)
            if totals is None:
                totals = groups[item.product_id] = _ProductTotals(revenue=Decimal("0"), units=0)
            totals.revenue += item.line_total
            totals.units += item.quantity
    return groups


def top_products(
    transactions: Iterable[TransactionRecord],
    product_lookup: ProductLookup,
    limit: int = 10,
    metric: RankMetric = RankMetric.REVENUE,
) -> List[ProductRanking]:
    """
    Rank products by revenue (or units) across the given transactions.

    Args:
        transactions: Already-filtered transactions (typically completed, in window)
        product_lookup: Resolves a product id to its record, or None
        limit: Maximum number of rankings to return
        metric: Sort key

    Returns:
        At most `limit` rankings, non-increasing by `metric`

    Raises:
        ValueError: If limit is negative
    """

    if limit < 0:
        raise ValueError("limit must be >= 0")

    groups = group_line_items(transactions)
    if metric is RankMetric.UNITS:
        key = lambda pair: pair[1].units  # noqa: E731
    else:
        key = lambda pair: pair[1].revenue  # noqa: E731

    ranked = sorted(groups.items(), key=key, reverse=True)[:limit]

    result: List[ProductRanking] = []
    for product_id, totals in ranked:
        product = product_lookup(product_id)
        result.append(
            ProductRanking(
                product_id=product_id,
                name=product.name if product is not None else UNKNOWN_PRODUCT,
                total_revenue=totals.revenue,
                total_units=totals.units,
            )
        )
    return result


__all__ = [
    "ProductLookup",
    "ProductRanking",
    "RankMetric",
    "UNKNOWN_PRODUCT",
    "group_line_items",
    "top_products",
]
