"""
Report Builder

DESIGN DECISION: Reports are computed DETERMINISTICALLY from the
transactions handed in. The builder never touches the ledger itself,
so the same code serves the ledger core, the service layer and the UI.

Two steps for every report:
1. Aggregate into a summary model (MonthlySummary, CategorySummary)
2. Format the summary as text

Callers that want numbers use step 1 only.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from src.config import get_settings
from src.errors import InvalidReportPeriodError
from src.models.transaction import (
    CategorySummary,
    CategoryTotal,
    MonthlySummary,
    Transaction,
)


def format_amount(value: Decimal) -> str:
    """
    Render an amount in plain notation with at least one decimal place.

    25 -> "25.0", Decimal("25.50") -> "25.5", Decimal("0.125") -> "0.125"
    """
    text = format(value.normalize(), "f")
    if "." not in text:
        text += ".0"
    return text


class ReportBuilder:
    """
    Builds monthly and per-category expense reports.
    """

    def __init__(self, sort_categories: Optional[bool] = None):
        """
        Args:
            sort_categories: List categories alphabetically instead of by
                            first appearance. If None, read from settings.
        """
        if sort_categories is None:
            sort_categories = get_settings().ledger.sort_category_report
        self._sort_categories = sort_categories

    def monthly_summary(
        self,
        transactions: Iterable[Transaction],
        month: int,
        year: int,
    ) -> MonthlySummary:
        """Sum transactions recorded in the given calendar month (1-indexed)."""
        if month < 1 or month > 12:
            raise InvalidReportPeriodError(month)

        total = Decimal("0")
        count = 0
        for transaction in transactions:
            recorded = transaction.recorded_at
            if recorded.month == month and recorded.year == year:
                total += transaction.amount
                count += 1

        return MonthlySummary(
            month=month,
            year=year,
            total=total,
            transaction_count=count,
        )

    def category_summary(
        self,
        transactions: Iterable[Transaction],
    ) -> CategorySummary:
        """Group all transactions by exact category and sum each group."""
        groups: dict[str, list[Decimal]] = {}

        for transaction in transactions:
            if transaction.category not in groups:
                groups[transaction.category] = []
            groups[transaction.category].append(transaction.amount)

        keys = sorted(groups) if self._sort_categories else list(groups)

        return CategorySummary(
            categories=[
                CategoryTotal(
                    category=key,
                    total=sum(groups[key], Decimal("0")),
                    transaction_count=len(groups[key]),
                )
                for key in keys
            ]
        )

    def format_monthly(self, summary: MonthlySummary) -> str:
        return (
            f"Month: {summary.month} {summary.year}\n"
            f"Total Expenses: {format_amount(summary.total)}"
        )

    def format_by_category(self, summary: CategorySummary) -> str:
        lines = ["Expense by Category:\n"]
        for entry in summary.categories:
            lines.append(f"{entry.category}: {format_amount(entry.total)}\n")
        return "".join(lines)
