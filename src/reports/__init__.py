"""Report generation package."""

from src.reports.builder import ReportBuilder, format_amount

__all__ = ["ReportBuilder", "format_amount"]
