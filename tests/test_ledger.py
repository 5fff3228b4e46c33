"""Tests for the Ledger core."""

import pytest
from datetime import datetime
from decimal import Decimal

from src.ledger import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidReportPeriodError,
    Ledger,
    LedgerError,
    TransactionIndexError,
)


class TestAddExpense:
    """Tests for Ledger.add_expense."""

    @pytest.mark.parametrize("amount", [0, -1, Decimal("-0.01"), 0.0, "0", "abc", "NaN", None, True])
    def test_invalid_amount_leaves_ledger_unchanged(self, ledger, amount):
        """Test that bad amounts raise and nothing is stored."""
        with pytest.raises(InvalidAmountError):
            ledger.add_expense(amount, "lunch", "Food")
        assert len(ledger) == 0
        assert ledger.known_categories == frozenset()

    def test_invalid_amount_is_a_value_error(self, ledger):
        """Test the error hierarchy."""
        with pytest.raises(ValueError):
            ledger.add_expense(-5, "x", "A")
        with pytest.raises(LedgerError):
            ledger.add_expense(-5, "x", "A")

    def test_new_category_becomes_known(self, ledger):
        """Test that an unseen category is registered."""
        ledger.add_expense(50.0, "lunch", "Food")
        assert "Food" in ledger.known_categories
        assert len(ledger) == 1

    def test_timestamp_comes_from_clock(self, ledger, clock):
        """Test that the clock stamps new expenses."""
        clock.set(datetime(2023, 7, 4, 18, 30))
        ledger.add_expense(10, "fireworks", "Fun")
        assert ledger.get_all_transactions()[0].recorded_at == datetime(2023, 7, 4, 18, 30)

    def test_duplicates_are_allowed(self, ledger):
        """Test that identical expenses are stored twice."""
        ledger.add_expense(5, "coffee", "Food")
        ledger.add_expense(5, "coffee", "Food")
        assert len(ledger) == 2

    def test_amounts_are_decimal(self, ledger):
        """Test that int, float and str amounts are stored as Decimal."""
        ledger.add_expense(3, "a", "X")
        ledger.add_expense(0.1, "b", "X")
        ledger.add_expense("2.50", "c", "X")
        amounts = [t.amount for t in ledger.get_all_transactions()]
        assert amounts == [Decimal("3"), Decimal("0.1"), Decimal("2.50")]

    def test_default_clock(self, validator):
        """Test that a ledger without a clock uses the current time."""
        ledger = Ledger(validator=validator)
        before = datetime.now()
        ledger.add_expense(1, "x", "A")
        after = datetime.now()
        assert before <= ledger.get_all_transactions()[0].recorded_at <= after


class TestUpdateTransaction:
    """Tests for Ledger.update_transaction."""

    def test_update_overwrites_fields_in_place(self, ledger, clock):
        """Test a successful update."""
        ledger.add_expense(10, "lunch", "Food")
        ledger.add_expense(20, "bus", "Transport")
        original = ledger.get_all_transactions()[0]
        stamped = original.recorded_at

        clock.set(datetime(2030, 1, 1))
        ledger.update_transaction(0, 12.5, "dinner", "Transport")

        updated = ledger.get_all_transactions()[0]
        assert updated is original
        assert updated.amount == Decimal("12.5")
        assert updated.description == "dinner"
        assert updated.category == "Transport"
        assert updated.recorded_at == stamped

    def test_unknown_category_is_rejected(self, ledger):
        """Test that update never registers categories."""
        ledger.add_expense(10, "lunch", "Food")
        with pytest.raises(InvalidCategoryError) as exc_info:
            ledger.update_transaction(0, 10, "lunch", "Travel")
        assert exc_info.value.category == "Travel"
        assert "Travel" not in ledger.known_categories
        assert ledger.get_all_transactions()[0].category == "Food"

    def test_category_match_is_case_sensitive(self, ledger):
        """Test that 'food' is not 'Food'."""
        ledger.add_expense(10, "lunch", "Food")
        with pytest.raises(InvalidCategoryError):
            ledger.update_transaction(0, 10, "lunch", "food")

    @pytest.mark.parametrize("position", [-1, 1, 5])
    def test_out_of_range_position(self, ledger, position):
        """Test that bad positions raise and length is unchanged."""
        ledger.add_expense(10, "lunch", "Food")
        with pytest.raises(TransactionIndexError) as exc_info:
            ledger.update_transaction(position, 10, "lunch", "Food")
        assert exc_info.value.position == position
        assert len(ledger) == 1

    def test_position_checked_before_amount(self, ledger):
        """Test check order: position, then amount, then category."""
        with pytest.raises(TransactionIndexError):
            ledger.update_transaction(0, -1, "x", "Nope")

        ledger.add_expense(10, "lunch", "Food")
        with pytest.raises(InvalidAmountError):
            ledger.update_transaction(0, -1, "x", "Nope")

    def test_invalid_amount_leaves_transaction_unchanged(self, ledger):
        """Test that a failed update does not partially apply."""
        ledger.add_expense(10, "lunch", "Food")
        with pytest.raises(InvalidAmountError):
            ledger.update_transaction(0, 0, "changed", "Food")
        t = ledger.get_all_transactions()[0]
        assert t.amount == Decimal("10")
        assert t.description == "lunch"

    def test_category_of_removed_transaction_stays_known(self, ledger):
        """Test that known categories never shrink."""
        ledger.add_expense(10, "taxi", "Travel")
        ledger.add_expense(10, "lunch", "Food")
        ledger.remove_transaction(0)
        ledger.update_transaction(0, 10, "lunch", "Travel")
        assert ledger.get_all_transactions()[0].category == "Travel"


class TestRemoveTransaction:
    """Tests for Ledger.remove_transaction."""

    def test_remove_shifts_positions(self, ledger):
        """Test that later entries move down by one."""
        ledger.add_expense(1, "a", "X")
        ledger.add_expense(2, "b", "X")
        ledger.add_expense(3, "c", "X")

        ledger.remove_transaction(1)

        assert [t.description for t in ledger.get_all_transactions()] == ["a", "c"]

    @pytest.mark.parametrize("position", [-1, 0, 3])
    def test_out_of_range_on_empty_ledger(self, ledger, position):
        """Test that removing from an empty ledger raises."""
        with pytest.raises(TransactionIndexError):
            ledger.remove_transaction(position)
        assert len(ledger) == 0

    def test_out_of_range_is_an_index_error(self, ledger):
        """Test the error hierarchy."""
        ledger.add_expense(1, "a", "X")
        with pytest.raises(IndexError, match="Transaction not found at index: 1"):
            ledger.remove_transaction(1)
        assert len(ledger) == 1


class TestQueries:
    """Tests for read-only ledger operations."""

    def test_all_transactions_is_a_snapshot(self, ledger):
        """Test that later adds do not change an earlier snapshot."""
        ledger.add_expense(1, "a", "X")
        snapshot = ledger.get_all_transactions()
        ledger.add_expense(2, "b", "X")

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
        assert len(ledger.get_all_transactions()) == 2

    def test_by_category_exact_match_in_order(self, ledger):
        """Test filtering by category."""
        ledger.add_expense(1, "first", "Food")
        ledger.add_expense(2, "other", "food")
        ledger.add_expense(3, "second", "Food")
        ledger.add_expense(4, "removed", "Food")
        ledger.add_expense(5, "moved", "Food")
        ledger.remove_transaction(3)
        ledger.update_transaction(3, 5, "moved", "food")

        result = ledger.get_transactions_by_category("Food")

        assert [t.description for t in result] == ["first", "second"]

    def test_by_category_returns_new_list(self, ledger):
        """Test that clearing the result does not touch the ledger."""
        ledger.add_expense(1, "a", "Food")
        result = ledger.get_transactions_by_category("Food")
        result.clear()
        assert len(ledger) == 1

    def test_by_category_unknown(self, ledger):
        """Test filtering by a category nobody used."""
        assert ledger.get_transactions_by_category("Nope") == []

    def test_total_for_category(self, ledger):
        """Test per-category totals."""
        ledger.add_expense(20.0, "x", "A")
        ledger.add_expense(5.0, "y", "A")
        ledger.add_expense(7, "z", "B")
        assert ledger.total_for_category("A") == Decimal("25.0")
        assert ledger.total_for_category("C") == Decimal("0")

    def test_get_transaction(self, ledger):
        """Test positional access."""
        ledger.add_expense(1, "a", "X")
        assert ledger.get_transaction(0).description == "a"
        with pytest.raises(TransactionIndexError):
            ledger.get_transaction(1)


class TestBalance:
    """Tests for Ledger.get_balance."""

    def test_balance_example(self, ledger):
        """Test income minus all expenses."""
        ledger.add_expense(50.0, "lunch", "Food")
        ledger.add_expense(30.0, "bus", "Transport")
        balance = ledger.get_balance(200.0)
        assert balance == Decimal("120.0")
        assert isinstance(balance, Decimal)

    def test_balance_ignores_dates(self, ledger, clock):
        """Test that expenses from every month are subtracted."""
        ledger.add_expense(10, "old", "A")
        clock.set(datetime(2025, 6, 1))
        ledger.add_expense(15, "new", "B")
        assert ledger.get_balance(100) == Decimal("75")

    def test_balance_of_empty_ledger(self, ledger):
        """Test that an empty ledger returns the income."""
        assert ledger.get_balance("1500.25") == Decimal("1500.25")

    def test_balance_can_go_negative(self, ledger):
        """Test overspending."""
        ledger.add_expense(300, "rent", "Home")
        assert ledger.get_balance(200) == Decimal("-100")

    @pytest.mark.parametrize("income", ["abc", float("nan"), float("-inf"), None])
    def test_balance_rejects_bad_income(self, ledger, income):
        """Test that a non-numeric income is a ledger error."""
        ledger.add_expense(10, "a", "X")
        with pytest.raises(InvalidAmountError):
            ledger.get_balance(income)

    def test_balance_accepts_zero_and_negative_income(self, ledger):
        """Test that only non-numbers are refused."""
        ledger.add_expense(10, "a", "X")
        assert ledger.get_balance(0) == Decimal("-10")
        assert ledger.get_balance("-5") == Decimal("-15")


class TestReports:
    """Tests for the text reports."""

    def test_category_report_example(self, ledger):
        """Test summing within a category."""
        ledger.add_expense(20.0, "x", "A")
        ledger.add_expense(5.0, "y", "A")
        report = ledger.generate_expense_by_category_report()
        assert report.startswith("Expense by Category:\n")
        assert "A: 25.0" in report

    def test_category_report_lists_every_category(self, ledger):
        """Test one line per category."""
        ledger.add_expense(1, "x", "A")
        ledger.add_expense(2, "y", "B")
        ledger.add_expense(3, "z", "A")
        report = ledger.generate_expense_by_category_report()
        assert report == "Expense by Category:\nA: 4.0\nB: 2.0\n"

    def test_empty_category_report(self, ledger):
        """Test the header-only report."""
        assert ledger.generate_expense_by_category_report() == "Expense by Category:\n"

    def test_monthly_report_filters_by_month_and_year(self, ledger, clock):
        """Test that only the requested month is summed."""
        clock.set(datetime(2024, 1, 3))
        ledger.add_expense(10, "a", "X")
        clock.set(datetime(2024, 1, 31, 23, 59))
        ledger.add_expense(20, "b", "Y")
        clock.set(datetime(2024, 2, 1))
        ledger.add_expense(40, "c", "X")
        clock.set(datetime(2023, 1, 15))
        ledger.add_expense(80, "d", "X")

        report = ledger.generate_monthly_report(1, 2024)

        assert report == "Month: 1 2024\nTotal Expenses: 30.0"

    def test_monthly_report_with_no_matches(self, ledger):
        """Test an empty month."""
        ledger.add_expense(10, "a", "X")
        assert ledger.generate_monthly_report(12, 1999) == "Month: 12 1999\nTotal Expenses: 0.0"

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_monthly_report_rejects_bad_month(self, ledger, month):
        """Test that month is 1-indexed and bounded."""
        with pytest.raises(InvalidReportPeriodError):
            ledger.generate_monthly_report(month, 2024)

    def test_monthly_summary(self, ledger):
        """Test the structured monthly summary."""
        ledger.add_expense(10, "a", "X")
        ledger.add_expense(2.5, "b", "X")
        summary = ledger.monthly_summary(1, 2024)
        assert summary.total == Decimal("12.5")
        assert summary.transaction_count == 2
