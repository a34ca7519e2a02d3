"""Generic fallback extractor for reports no bureau strategy could handle.

This module provides the GenericExtractor class, which scans a report line
by line. Any line that mentions a known lender or looks like it carries an
account number seeds a small window of surrounding lines, and the shared
field extractors run over that window. It works for unknown layouts and
for bureau layouts whose dedicated strategy found nothing.
"""

import logging
import re

from credit_reports.core.banks import contains_institution
from credit_reports.parsers import fields
from credit_reports.parsers.accounts import extract_account_from_section
from credit_reports.parsers.assembler import assemble_result, empty_result
from credit_reports.parsers.bureaus.base import report_date_patterns
from credit_reports.parsers.validation import is_valid_account
from credit_reports.schemas.internal import (
    AccountStatus,
    BureauKind,
    CreditAccount,
    CreditReportSummary,
    ParseResult,
)

logger = logging.getLogger(__name__)

# Masked run followed by digits, digits followed by a masked run, or a label
ACCOUNT_NUMBER_HINT = re.compile(
    r"[X*]{4,20}\d{2,20}|\d{2,20}[X*]{4,20}|\b(?:account\s{0,3}(?:number|no\b)|a/c\s{0,3}no\b)",
    re.IGNORECASE,
)

LINES_BEFORE = 2
LINES_AFTER = 5

REPORT_DATE_PATTERNS = report_date_patterns(
    r"\breport\s{1,5}date",
    r"\bdate\s{1,5}of\s{1,5}report",
    r"\bgenerated\s{1,5}on",
    r"\bas\s{1,5}on",
)


class GenericExtractor:
    """Line-window extractor used as the last line of defence.

    Example:
        >>> extractor = GenericExtractor()
        >>> result = extractor.parse_report(text)
        >>> print(result.bureau, len(result.accounts))
    """

    id_prefix = "generic"

    def is_seed_line(self, line: str) -> bool:
        """A line worth building a window around."""
        return contains_institution(line) or bool(ACCOUNT_NUMBER_HINT.search(line))

    def extract_accounts(self, text: str) -> list[CreditAccount]:
        """Return active, validated accounts found around seed lines.

        Fields are read from the seed line before the rest of its window,
        so neighbouring accounts do not bleed into each other. Windows
        overlap, so the same account can be seen several times; the first
        window to produce a given account number wins.
        """
        if not text:
            return []

        lines = text.splitlines()
        accounts: list[CreditAccount] = []
        seen_numbers: set[str] = set()

        for index, line in enumerate(lines):
            if not self.is_seed_line(line):
                continue

            window = "\n".join(lines[max(0, index - LINES_BEFORE) : index + LINES_AFTER + 1])
            account = extract_account_from_section(
                window, f"{self.id_prefix}_{len(accounts) + 1}", focus=line
            )
            if account is None or account.account_number in seen_numbers:
                continue
            if account.account_status != AccountStatus.ACTIVE:
                continue
            if not is_valid_account(account):
                continue

            seen_numbers.add(account.account_number)
            accounts.append(account)

        logger.debug("Generic extractor found %d accounts in %d lines", len(accounts), len(lines))
        return accounts

    def extract_summary(self, text: str, errors: list[str] | None = None) -> CreditReportSummary:
        credit_score, score_provider = fields.extract_credit_score(text)
        return CreditReportSummary(
            report_date=fields.extract_date(text, REPORT_DATE_PATTERNS),
            credit_score=credit_score,
            score_provider=score_provider,
            recent_inquiries=fields.extract_recent_inquiries(text),
            errors=list(errors or []),
        )

    def parse_report(
        self,
        text: str,
        errors: list[str] | None = None,
        bureau: BureauKind = BureauKind.UNKNOWN,
    ) -> ParseResult:
        """Parse ``text`` without any layout assumptions. Never raises.

        Args:
            text: Full report text
            errors: Errors already collected by earlier strategies
            bureau: Bureau to report (a detected bureau whose parser failed)

        Returns:
            ParseResult; on internal failure an empty result carrying the errors
        """
        collected = list(errors or [])
        try:
            summary = self.extract_summary(text or "", collected)
            return assemble_result(bureau, summary, self.extract_accounts(text or ""))
        except Exception as e:
            logger.exception("Generic extraction failed")
            return empty_result(collected + [f"Generic extraction failed: {e}"], bureau)
