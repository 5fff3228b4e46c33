"""
Core Data Models for Expense Ledger

These models define the schemas for everything the ledger stores
and everything it reports. They are designed to:
1. Enforce type safety at runtime
2. Keep amounts as Decimal end to end
3. Be serializable for logging and the UI

DESIGN DECISION: A Transaction has no ID of its own.
It is addressed by its position in the ledger, exactly like the
list it lives in. Removing an entry shifts every later position.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


def _float_to_decimal(value: Any) -> Any:
    """Route floats through str so 0.1 stays Decimal('0.1')."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single recorded expense.

    Amount, description and category may be overwritten in place by
    the ledger. The timestamp is set once at insertion and never changes.
    """
    model_config = ConfigDict(validate_assignment=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Expense amount (always positive)"
    )
    recorded_at: datetime = Field(
        ...,
        description="When the expense was recorded"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    # Compared with exact, case-sensitive equality
    category: str = Field(
        ...,
        description="Category label"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def convert_float_amount(cls, v: Any) -> Any:
        return _float_to_decimal(v)

    def to_display_dict(self) -> dict:
        """Convert to a flat dictionary for tables and logs."""
        return {
            "recorded_at": self.recorded_at.isoformat(),
            "description": self.description,
            "category": self.category,
            "amount": str(self.amount),
        }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single issue found while reviewing an expense."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'suspicious_value', 'blank', 'near_duplicate_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the soft review of an expense.

    Hard failures are raised as exceptions by the validator and
    never show up here. Everything in a ValidationResult is advisory.
    """

    reviewed_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )

    @property
    def warnings(self) -> list[str]:
        """Messages of warning-level issues."""
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity == "warning" for issue in self.issues)


# =============================================================================
# REPORT MODELS
# =============================================================================

class MonthlySummary(BaseModel):
    """Total spend for one calendar month."""

    month: int = Field(..., ge=1, le=12)
    year: int
    total: Decimal = Field(default=Decimal("0"))
    transaction_count: int = Field(default=0, ge=0)


class CategoryTotal(BaseModel):
    """Total spend for one category."""

    category: str
    total: Decimal
    transaction_count: int = Field(ge=0)


class CategorySummary(BaseModel):
    """
    Spend grouped by category.

    Categories appear in the order they were first seen in the
    ledger unless the builder was asked to sort them.
    """

    categories: list[CategoryTotal] = Field(default_factory=list)

    @property
    def grand_total(self) -> Decimal:
        return sum((entry.total for entry in self.categories), Decimal("0"))

    def as_dict(self) -> dict[str, Decimal]:
        return {entry.category: entry.total for entry in self.categories}
