"""Custom exception classes for credit report processing.

These exceptions are raised by the service layer around the parsing
engine (input checks, PDF decoding). The engine itself never raises to
its caller; its failures are reported as strings in ``summary.errors``.
Each exception maps to a code defined in errors.py.
"""

from typing import Any


class ReportProcessingError(Exception):
    """Base exception for all credit report processing errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "PDF_002")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class PDFExtractionError(ReportProcessingError):
    """Raised when the report PDF cannot be turned into text.

    Common causes:
    - Corrupted PDF file (PDF_001)
    - Password-protected PDF (PDF_002)
    - Incorrect password (PDF_003)
    """

    pass


class InputTooLargeError(ReportProcessingError):
    """Raised when report text exceeds the configured size ceiling (REPORT_001)."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            "REPORT_001",
            details={"length": length, "limit": limit},
            http_status=413,
        )


class EmptyReportError(ReportProcessingError):
    """Raised when no text is available to parse (REPORT_002)."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("REPORT_002", details=details, http_status=422)
