"""
Data Models Package

This package contains all Pydantic models used in the Expense Ledger.
All data stored or reported by the ledger conforms to these schemas.
"""

from src.models.transaction import (
    CategorySummary,
    CategoryTotal,
    MonthlySummary,
    Transaction,
    ValidationIssue,
    ValidationResult,
)
from src.models.audit import (
    AUDIT_ROW_COLUMNS,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CategorySummary",
    "CategoryTotal",
    "MonthlySummary",
    "Transaction",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AUDIT_ROW_COLUMNS",
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
