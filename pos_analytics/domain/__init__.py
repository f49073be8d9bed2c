"""Pure domain value objects (no I/O)."""

from .product import ProductRecord, is_low_stock, is_out_of_stock
from .transaction import LineItem, TransactionRecord, TransactionStatus
from .window import DateWindow, InvalidRangeError

__all__ = [
    "DateWindow",
    "InvalidRangeError",
    "LineItem",
    "ProductRecord",
    "TransactionRecord",
    "TransactionStatus",
    "is_low_stock",
    "is_out_of_stock",
]
