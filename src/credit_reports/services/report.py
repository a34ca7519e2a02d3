"""Credit report processing service.

This module wraps the parsing engine for callers:
1. Enforce input limits (the engine itself never truncates)
2. Decode PDFs into text
3. Parse text through the shared parser registry
4. Convert accounts into review records
"""

import logging

from credit_reports.config import Settings, get_settings
from credit_reports.core.exceptions import EmptyReportError, InputTooLargeError
from credit_reports.parsers.extractor import PDFTextExtractor
from credit_reports.parsers.registry import ParserRegistry
from credit_reports.schemas.internal import BureauKind, CreditAccount, ParseResult
from credit_reports.schemas.report import ReviewAccountRecord

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_PARTIAL_LENGTH = 4


class CreditReportService:
    """Service for turning credit bureau reports into structured data.

    The registry is shared and read-only; one service instance may serve
    concurrent requests.

    Example:
        >>> service = CreditReportService(build_default_registry())
        >>> result = service.parse_text(report_text)
        >>> records = service.to_review_records(result)
    """

    def __init__(
        self,
        registry: ParserRegistry,
        extractor: PDFTextExtractor | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the service.

        Args:
            registry: Parser registry built at startup
            extractor: PDF text extractor (default: new PDFTextExtractor)
            settings: Application settings (default: cached settings)
        """
        self.registry = registry
        self.extractor = extractor or PDFTextExtractor()
        self.settings = settings or get_settings()

    def _check_size(self, text: str) -> None:
        if len(text) > self.settings.max_report_chars:
            raise InputTooLargeError(len(text), self.settings.max_report_chars)

    def parse_text(self, text: str) -> ParseResult:
        """Parse report text.

        Raises:
            InputTooLargeError: If the text exceeds ``max_report_chars``
        """
        self._check_size(text)
        result = self.registry.parse_report(text)
        logger.info(
            "Report parsed: bureau=%s accounts=%d errors=%d",
            result.bureau.value,
            len(result.accounts),
            len(result.summary.errors),
        )
        return result

    def parse_pdf(self, pdf_bytes: bytes, password: str | None = None) -> ParseResult:
        """Decode a report PDF and parse its text.

        Raises:
            PDFExtractionError: If the PDF cannot be decoded
            EmptyReportError: If the PDF holds no extractable text
            InputTooLargeError: If the text exceeds ``max_report_chars``
        """
        text = self.extractor.extract_text(pdf_bytes, password=password)
        if not text.strip():
            raise EmptyReportError(details={"reason": "no extractable text"})
        return self.parse_text(text)

    def detect(self, text: str) -> BureauKind | None:
        self._check_size(text)
        return self.registry.detect_bureau(text)

    def to_review_record(self, account: CreditAccount) -> ReviewAccountRecord:
        account_type = account.account_type.value
        return ReviewAccountRecord(
            bank_name=account.bank_name,
            account_type=account_type,
            account_number_partial=account.account_number[-ACCOUNT_NUMBER_PARTIAL_LENGTH:],
            balance=account.current_balance,
            credit_limit=account.credit_limit,
            open_date=account.account_open_date,
            confidence_score=account.confidence_score,
            raw_data=account.raw_data,
            needs_review=account.confidence_score < self.settings.review_confidence_threshold,
            discovered_account_name=f"{account.bank_name} - {account_type}",
        )

    def to_review_records(self, result: ParseResult) -> list[ReviewAccountRecord]:
        """Review records for every account, in result order."""
        return [self.to_review_record(account) for account in result.accounts]
