"""Ledger core package."""

from src.errors import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidReportPeriodError,
    LedgerError,
    TransactionIndexError,
)
from src.ledger.manager import Amount, Ledger

__all__ = [
    "Amount",
    "Ledger",
    # Exceptions
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidReportPeriodError",
    "LedgerError",
    "TransactionIndexError",
]
