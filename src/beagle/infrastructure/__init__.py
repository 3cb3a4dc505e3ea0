"""Infrastructure shared by the repositories."""

from .transactions import (
    BorrowedTransaction,
    OwnedTransaction,
    TransactionCoordinator,
    TransactionHandle,
)

__all__ = [
    "BorrowedTransaction",
    "OwnedTransaction",
    "TransactionCoordinator",
    "TransactionHandle",
]
