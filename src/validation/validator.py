"""
Two-Tier Expense Validation

DESIGN DECISION: Validation happens in two distinct tiers:

TIER 1 - HARD CHECKS (raise):
- Amount must be a finite number greater than zero
- Position must address an existing transaction
- Category must already be known (update only)
These run before any mutation. A failure leaves the ledger unchanged.

TIER 2 - SOFT REVIEW (report):
- Unusually large amounts
- Blank descriptions
- Categories that differ from a known one only by case or spacing
This never blocks. It reports issues for the caller to show or log.

IMPORTANT: Validation NEVER silently fixes issues.
"Food" and "food " stay two different categories.
"""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from src.config import get_settings
from src.errors import (
    InvalidAmountError,
    InvalidCategoryError,
    TransactionIndexError,
)
from src.models.transaction import ValidationIssue, ValidationResult


class TransactionValidator:
    """
    Validates expense input for the ledger.

    Tier 1 methods raise ledger errors.
    Tier 2 (`review`) returns a ValidationResult.
    """

    def __init__(
        self,
        max_expense_amount: Optional[Decimal] = None,
    ):
        """
        Initialize validator.

        Args:
            max_expense_amount: Threshold for the "unusually high" warning.
                               If None, read from settings.
        """
        if max_expense_amount is None:
            max_expense_amount = get_settings().ledger.max_expense_amount
        self._max_expense_amount = Decimal(str(max_expense_amount))

    # -------------------------------------------------------------------------
    # Tier 1
    # -------------------------------------------------------------------------

    def coerce_amount(self, value: Any) -> Decimal:
        """
        Convert an amount to Decimal and check it is positive.

        Floats go through str() so 12.3 becomes Decimal('12.3').
        """
        amount = self._to_decimal(value, "Expense amount")
        if amount <= 0:
            raise InvalidAmountError("Expense amount must be positive.", amount=value)

        return amount

    def coerce_income(self, value: Any) -> Decimal:
        """
        Convert a monthly income to Decimal.

        Zero and negative incomes are allowed; only non-numbers are refused.
        """
        return self._to_decimal(value, "Monthly income")

    def _to_decimal(self, value: Any, label: str) -> Decimal:
        if isinstance(value, bool) or value is None:
            raise InvalidAmountError(f"{label} must be a number.", amount=value)

        try:
            if isinstance(value, Decimal):
                number = value
            elif isinstance(value, float):
                number = Decimal(str(value))
            else:
                number = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmountError(f"{label} must be a number.", amount=value)

        if not number.is_finite():
            raise InvalidAmountError(f"{label} must be a finite number.", amount=value)

        return number

    def check_position(self, position: int, count: int) -> None:
        """Raise unless 0 <= position < count."""
        if isinstance(position, bool) or not isinstance(position, int):
            raise TransactionIndexError(position, count)
        if position < 0 or position >= count:
            raise TransactionIndexError(position, count)

    def check_category_known(self, category: str, known: Iterable[str]) -> None:
        """Raise unless the category is already known (exact match)."""
        if category not in known:
            raise InvalidCategoryError(category)

    # -------------------------------------------------------------------------
    # Tier 2
    # -------------------------------------------------------------------------

    def review(
        self,
        amount: Decimal,
        description: str,
        category: str,
        known: Iterable[str],
    ) -> ValidationResult:
        """
        Soft review of an expense that already passed tier 1.

        Returns a ValidationResult; never raises.
        """
        issues = []
        known = set(known)

        if amount > self._max_expense_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        if not description or not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="blank",
                message="Description is empty",
                severity="warning",
                suggested_fix="Add a short note so you recognise this expense later",
            ))

        if category not in known:
            normalized = category.strip().casefold()
            lookalikes = sorted(
                k for k in known if k.strip().casefold() == normalized
            )
            if lookalikes:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="near_duplicate_category",
                    message=(
                        f"Category '{category}' looks like existing "
                        f"category '{lookalikes[0]}'"
                    ),
                    severity="warning",
                    suggested_fix=f"Did you mean '{lookalikes[0]}'?",
                ))
            else:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="new_category",
                    message=f"Category '{category}' will be created",
                    severity="info",
                ))

        return ValidationResult(issues=issues)

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of review results.
        """
        if not result.has_warnings:
            return "✅ All checks passed!"

        lines = ["⚠️ Please verify the following:"]
        for issue in result.issues:
            if issue.severity != "warning":
                continue
            lines.append(f"   • {issue.message}")
            if issue.suggested_fix:
                lines.append(f"     💡 {issue.suggested_fix}")

        return "\n".join(lines)
