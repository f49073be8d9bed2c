"""
Domain: Product stock snapshot.

Contract excerpts implemented here:
- A product is "low stock" iff active AND stock_quantity <= min_stock_level.
- A product is "out of stock" iff active AND stock_quantity == 0
  (always a subset of low stock).
- The threshold is the product's own min_stock_level, never a global constant, so the
  rules are predicates over the whole record.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True, slots=True)
class ProductRecord:
    """Immutable product snapshot as handed over by the product repository."""

    product_id: str
    name: str
    price: Decimal
    cost: Decimal
    stock_quantity: int
    min_stock_level: int
    is_active: bool = True
    category_id: Optional[str] = None
    barcode: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValueError("stock_quantity must be >= 0")
        if self.min_stock_level < 0:
            raise ValueError("min_stock_level must be >= 0")

    @property
    def is_low_stock(self) -> bool:
        return is_low_stock(self)

    @property
    def is_out_of_stock(self) -> bool:
        return is_out_of_stock(self)

    @property
    def stock_value(self) -> Decimal:
        return self.price * self.stock_quantity


def is_low_stock(product: ProductRecord) -> bool:
    """Compares the record's own quantity against its own threshold."""

    return product.is_active and product.stock_quantity <= product.min_stock_level


def is_out_of_stock(product: ProductRecord) -> bool:
    return product.is_active and product.stock_quantity == 0


__all__ = ["ProductRecord", "is_low_stock", "is_out_of_stock"]
