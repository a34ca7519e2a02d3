"""Service layer around the parsing engine."""

from credit_reports.services.report import CreditReportService

__all__ = ["CreditReportService"]
