"""
Product repository (Supabase).

Read-only access to the legacy `products` table.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Optional

from supabase import Client

from pos_analytics.domain.product import ProductRecord
from pos_analytics.repositories.client import get_supabase
from pos_analytics.repositories.paging import fetch_all_rows

_PRODUCTS_TABLE: str = "products"


def _required(row: Mapping[str, Any], key: str) -> Any:
    value = row[key]
    if value is None:
        raise ValueError(f"Product {row.get('id')!r} has no {key}")
    return value


def _row_to_product(row: Mapping[str, Any]) -> ProductRecord:
    """
    Convert a Supabase row into a ProductRecord.

    Money and stock columns are required; a missing value raises instead of being read
    as zero (which would turn the product into an out-of-stock alert).
    """

    category = row.get("categoryId")
    return ProductRecord(
        product_id=str(row["id"]),
        name=str(row["name"]),
        price=Decimal(str(_required(row, "price"))),
        cost=Decimal(str(_required(row, "cost"))),
        stock_quantity=int(_required(row, "stockQuantity")),
        min_stock_level=int(_required(row, "minStockLevel")),
        is_active=bool(row.get("isActive", True)),
        category_id=str(category) if category else None,
        barcode=row.get("barcode"),
    )


class SupabaseProductRepository:
    """ProductRepository backed by Supabase."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def active_snapshot(self) -> List[ProductRecord]:
        """
        Retrieve all active products, reading every page.

        Returns:
            List[ProductRecord] (possibly empty)
        """

        def build_query():
            return self.client.table(_PRODUCTS_TABLE).select("*").eq("isActive", True).order("id")

        rows = fetch_all_rows(build_query, "list products")
        return [_row_to_product(row) for row in rows]

    def by_id(self, product_id: str) -> Optional[ProductRecord]:
        """
        Retrieve a single product by its ID, active or not.

        Returns:
            ProductRecord or None if not found
        """

        response = (
            self.client.table(_PRODUCTS_TABLE)
            .select("*")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to get product: {error}")

        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        return _row_to_product(rows[0])


__all__ = ["SupabaseProductRepository"]
