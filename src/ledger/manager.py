"""
Expense Ledger

The ledger is an ordered list of Transactions plus the set of category
names that have ever been used on an added expense.

GUARANTEES:
- Every stored Transaction has amount > 0
- Every stored Transaction's category was known when it was stored
- A call that raises leaves the ledger exactly as it was

Positions are plain list indices. Removing an entry shifts every later
position down by one.

The ledger is NOT thread-safe. Share it through LedgerService
(src.orchestrator), which holds one lock per ledger.
"""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from src.models.transaction import CategorySummary, MonthlySummary, Transaction
from src.reports import ReportBuilder
from src.validation import TransactionValidator


Amount = Union[Decimal, int, float, str]


class Ledger:
    """
    In-memory expense ledger.

    Add never rejects a category; it registers unseen ones.
    Update only accepts categories that are already known.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        validator: Optional[TransactionValidator] = None,
        report_builder: Optional[ReportBuilder] = None,
    ):
        """
        Initialize an empty ledger.

        Args:
            clock: Zero-argument callable giving the timestamp for new
                   expenses. Defaults to datetime.now.
            validator: Input validator. Built from settings if None.
            report_builder: Report builder. Built from settings if None.
        """
        self._clock = clock or datetime.now
        self._validator = validator or TransactionValidator()
        self._report_builder = report_builder or ReportBuilder()
        self._transactions: list[Transaction] = []
        self._categories: set[str] = set()

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def known_categories(self) -> frozenset[str]:
        return frozenset(self._categories)

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_expense(self, amount: Amount, description: str, category: str) -> None:
        """
        Record a new expense stamped with the current clock time.

        Raises:
            InvalidAmountError: amount is not a positive number
        """
        value = self._validator.coerce_amount(amount)

        transaction = Transaction(
            amount=value,
            recorded_at=self._clock(),
            description=description,
            category=category,
        )

        self._categories.add(category)
        self._transactions.append(transaction)

    def update_transaction(
        self,
        position: int,
        amount: Amount,
        description: str,
        category: str,
    ) -> None:
        """
        Overwrite amount, description and category of one transaction.

        The recorded timestamp is left untouched.

        Raises:
            TransactionIndexError: no transaction at position
            InvalidAmountError: amount is not a positive number
            InvalidCategoryError: category has never been added
        """
        self._validator.check_position(position, len(self._transactions))
        value = self._validator.coerce_amount(amount)
        self._validator.check_category_known(category, self._categories)

        transaction = self._transactions[position]
        # Validate the whole record before touching the stored one
        replacement = Transaction(
            amount=value,
            recorded_at=transaction.recorded_at,
            description=description,
            category=category,
        )
        transaction.amount = replacement.amount
        transaction.description = replacement.description
        transaction.category = replacement.category

    def remove_transaction(self, position: int) -> None:
        """
        Remove one transaction; later positions shift down by one.

        Raises:
            TransactionIndexError: no transaction at position
        """
        self._validator.check_position(position, len(self._transactions))
        del self._transactions[position]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_transaction(self, position: int) -> Transaction:
        self._validator.check_position(position, len(self._transactions))
        return self._transactions[position]

    def get_all_transactions(self) -> tuple[Transaction, ...]:
        """
        Snapshot of all transactions in insertion order.

        The tuple does not follow later adds or removals. The records
        inside are the ledger's own, so edits made through
        update_transaction are visible in them.
        """
        return tuple(self._transactions)

    def get_transactions_by_category(self, category: str) -> list[Transaction]:
        """Transactions whose category equals `category` exactly, in ledger order."""
        return [t for t in self._transactions if t.category == category]

    def total_for_category(self, category: str) -> Decimal:
        return sum(
            (t.amount for t in self._transactions if t.category == category),
            Decimal("0"),
        )

    def total_expenses(self) -> Decimal:
        return sum((t.amount for t in self._transactions), Decimal("0"))

    def get_balance(self, monthly_income: Amount) -> Decimal:
        """
        Income minus the sum of ALL recorded expenses (not just this month).

        Raises:
            InvalidAmountError: income is not a finite number
        """
        income = self._validator.coerce_income(monthly_income)
        return income - self.total_expenses()

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def monthly_summary(self, month: int, year: int) -> MonthlySummary:
        return self._report_builder.monthly_summary(self._transactions, month, year)

    def category_summary(self) -> CategorySummary:
        return self._report_builder.category_summary(self._transactions)

    def generate_monthly_report(self, month: int, year: int) -> str:
        """
        Total spend for one calendar month (month is 1-indexed).

        Raises:
            InvalidReportPeriodError: month outside 1..12
        """
        return self._report_builder.format_monthly(self.monthly_summary(month, year))

    def generate_expense_by_category_report(self) -> str:
        return self._report_builder.format_by_category(self.category_summary())
