"""Shared fixtures for Expense Ledger tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.config import get_settings
from src.ledger import Ledger
from src.reports import ReportBuilder
from src.validation import TransactionValidator


class FakeClock:
    """Clock that returns whatever time the test sets."""

    def __init__(self, now: datetime):
        self.now = now

    def set(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make sure every test sees the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0))


@pytest.fixture
def validator():
    return TransactionValidator(max_expense_amount=Decimal("10000"))


@pytest.fixture
def ledger(clock, validator):
    return Ledger(
        clock=clock,
        validator=validator,
        report_builder=ReportBuilder(sort_categories=False),
    )
