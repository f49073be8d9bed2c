"""Collaborator contracts and their implementations."""

from .base import OperatorRepository, ProductRepository, TransactionRepository
from .memory import (
    InMemoryOperatorRepository,
    InMemoryProductRepository,
    InMemoryTransactionRepository,
)

__all__ = [
    "InMemoryOperatorRepository",
    "InMemoryProductRepository",
    "InMemoryTransactionRepository",
    "OperatorRepository",
    "ProductRepository",
    "TransactionRepository",
]
