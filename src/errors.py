"""
Ledger Exceptions

Every failure the ledger can report is raised BEFORE any mutation,
so a caller that catches one of these knows the ledger is unchanged.
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError, ValueError):
    """Expense amount is missing, not a number, or not positive."""
    
    def __init__(self, message: str, amount: Optional[object] = None):
        self.amount = amount
        super().__init__(message)


class InvalidCategoryError(LedgerError, LookupError):
    """Category has never been used by an added expense."""
    
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Invalid category: {category}")


class TransactionIndexError(LedgerError, IndexError):
    """No transaction exists at the requested position."""
    
    def __init__(self, position: int, count: int):
        self.position = position
        self.count = count
        super().__init__(f"Transaction not found at index: {position}")


class InvalidReportPeriodError(LedgerError, ValueError):
    """Report month is outside 1..12."""
    
    def __init__(self, month: int):
        self.month = month
        super().__init__(f"Month must be between 1 and 12, got {month}")
