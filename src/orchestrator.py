"""
Main Orchestrator for Expense Ledger

This module ties together the ledger, the validator's soft review and
the audit trail, and defines the entry points the UI calls.

DESIGN DECISION: The orchestrator enforces the boundaries:
- One exclusive lock per ledger, held for the whole call
- Every change is audited
- Every rejected call is audited and then re-raised unchanged
- Unexpected failures are logged as system errors and re-raised

The ledger core knows nothing about locks or auditing.
"""

import threading
from decimal import Decimal
from typing import Optional
from uuid import UUID

from src.audit import AuditLogger, configure_logging, create_correlation_id
from src.config import get_settings
from src.ledger import Amount, Ledger, LedgerError
from src.models.transaction import (
    CategorySummary,
    MonthlySummary,
    Transaction,
    ValidationResult,
)
from src.reports import ReportBuilder
from src.services.storage import InMemoryAuditStorage
from src.validation import TransactionValidator


class LedgerService:
    """
    Thread-safe, audited facade over one Ledger.

    Mutations return the validator's soft review so the caller can
    show warnings. Errors propagate as the ledger raised them.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger if ledger is not None else Ledger()
        self._audit_logger = audit_logger
        self._lock = threading.RLock()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        amount: Amount,
        description: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        """
        Add an expense and audit it.

        Returns:
            Soft review of the stored expense
        """
        correlation_id = correlation_id or create_correlation_id()

        with self._lock:
            known_before = self._ledger.known_categories
            try:
                self._ledger.add_expense(amount, description, category)
            except LedgerError as e:
                self._reject("add_expense", e, correlation_id)
                raise
            except Exception as e:
                self._fail("add_expense", e, correlation_id)
                raise

            position = len(self._ledger) - 1
            stored = self._ledger.get_transaction(position)
            review = self._ledger.validator.review(
                stored.amount, description, category, known_before
            )

            if self._audit_logger:
                if category not in known_before:
                    self._audit_logger.log_category_registered(
                        category=category,
                        correlation_id=correlation_id,
                    )
                self._audit_logger.log_transaction_added(
                    position=position,
                    amount=str(stored.amount),
                    category=category,
                    correlation_id=correlation_id,
                    warnings=review.warnings,
                )

            return review

    def update_transaction(
        self,
        position: int,
        amount: Amount,
        description: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        """
        Update a transaction in place and audit the before/after values.
        """
        correlation_id = correlation_id or create_correlation_id()

        with self._lock:
            try:
                before = self._ledger.get_transaction(position).to_display_dict()
                self._ledger.update_transaction(position, amount, description, category)
            except LedgerError as e:
                self._reject("update_transaction", e, correlation_id, position)
                raise
            except Exception as e:
                self._fail("update_transaction", e, correlation_id, position)
                raise

            after = self._ledger.get_transaction(position)
            review = self._ledger.validator.review(
                after.amount, description, category, self._ledger.known_categories
            )

            if self._audit_logger:
                self._audit_logger.log_transaction_updated(
                    position=position,
                    before=before,
                    after=after.to_display_dict(),
                    correlation_id=correlation_id,
                    warnings=review.warnings,
                )

            return review

    def remove_transaction(
        self,
        position: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        correlation_id = correlation_id or create_correlation_id()

        with self._lock:
            try:
                removed = self._ledger.get_transaction(position).to_display_dict()
                self._ledger.remove_transaction(position)
            except LedgerError as e:
                self._reject("remove_transaction", e, correlation_id, position)
                raise
            except Exception as e:
                self._fail("remove_transaction", e, correlation_id, position)
                raise

            if self._audit_logger:
                self._audit_logger.log_transaction_removed(
                    position=position,
                    removed=removed,
                    correlation_id=correlation_id,
                )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_all_transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return self._ledger.get_all_transactions()

    def get_transactions_by_category(self, category: str) -> list[Transaction]:
        with self._lock:
            return self._ledger.get_transactions_by_category(category)

    def known_categories(self) -> list[str]:
        with self._lock:
            return sorted(self._ledger.known_categories)

    def total_for_category(self, category: str) -> Decimal:
        with self._lock:
            return self._ledger.total_for_category(category)

    def get_balance(
        self,
        monthly_income: Amount,
        correlation_id: Optional[UUID] = None,
    ) -> Decimal:
        with self._lock:
            try:
                return self._ledger.get_balance(monthly_income)
            except LedgerError as e:
                self._reject("get_balance", e, correlation_id or create_correlation_id())
                raise

    def monthly_summary(self, month: int, year: int) -> MonthlySummary:
        with self._lock:
            return self._ledger.monthly_summary(month, year)

    def category_summary(self) -> CategorySummary:
        with self._lock:
            return self._ledger.category_summary()

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def generate_monthly_report(
        self,
        month: int,
        year: int,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        correlation_id = correlation_id or create_correlation_id()

        with self._lock:
            try:
                report = self._ledger.generate_monthly_report(month, year)
            except LedgerError as e:
                self._reject("generate_monthly_report", e, correlation_id)
                raise
            except Exception as e:
                self._fail("generate_monthly_report", e, correlation_id)
                raise

        if self._audit_logger:
            self._audit_logger.log_report_generated(
                report_type="monthly",
                parameters={"month": month, "year": year},
                correlation_id=correlation_id,
            )
        return report

    def generate_expense_by_category_report(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        correlation_id = correlation_id or create_correlation_id()

        with self._lock:
            try:
                report = self._ledger.generate_expense_by_category_report()
            except Exception as e:
                self._fail("generate_expense_by_category_report", e, correlation_id)
                raise

        if self._audit_logger:
            self._audit_logger.log_report_generated(
                report_type="by_category",
                parameters={},
                correlation_id=correlation_id,
            )
        return report

    def _reject(
        self,
        operation: str,
        error: LedgerError,
        correlation_id: UUID,
        position: Optional[int] = None,
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_operation_rejected(
                operation=operation,
                error=error,
                correlation_id=correlation_id,
                position=position if isinstance(position, int) else None,
            )

    def _fail(
        self,
        operation: str,
        error: Exception,
        correlation_id: UUID,
        position: Optional[int] = None,
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_error(
                error_type=type(error).__name__,
                error_message=str(error),
                details={"operation": operation, "position": repr(position)},
                correlation_id=correlation_id,
            )


def create_app_components() -> tuple[LedgerService, InMemoryAuditStorage]:
    """
    Factory function to create all application components from settings.

    Returns:
        (ledger_service, audit_storage)
    """
    settings = get_settings()
    app_settings = settings.app
    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    ledger = Ledger(
        validator=TransactionValidator(
            max_expense_amount=settings.ledger.max_expense_amount,
        ),
        report_builder=ReportBuilder(
            sort_categories=settings.ledger.sort_category_report,
        ),
    )
    audit_storage = InMemoryAuditStorage(
        max_events=app_settings.audit_history_limit,
    )
    audit_logger = AuditLogger(audit_storage)

    return LedgerService(ledger=ledger, audit_logger=audit_logger), audit_storage
