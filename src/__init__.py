"""
Expense Ledger - Source Package

An in-memory personal expense ledger: record, edit, delete and
summarize expenses by category and by month.

DESIGN PRINCIPLES:
1. Validate first, mutate second
2. Fail early, fail visibly
3. No silent corrections
4. Every change must be auditable
5. The core stays lock-free; callers that share it add the lock
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"
