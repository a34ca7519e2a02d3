"""Experian report parser.

Experian reports open with a compact "SUMMARY: CREDIT ACCOUNT INFORMATION"
table, which is read first by the token-stream table parser. Reports
without that table (or where no row survives) fall back to splitting the
detailed section into per-account blocks.
"""

import logging

from credit_reports.parsers.assembler import assemble_result
from credit_reports.parsers.bureaus.base import (
    compile_patterns,
    extract_section_accounts,
    extract_summary,
    matches_any,
    report_date_patterns,
)
from credit_reports.parsers.experian_table import ExperianTableParser
from credit_reports.parsers.sections import section_strategies
from credit_reports.schemas.internal import BureauKind, CreditAccount, ParseResult

logger = logging.getLogger(__name__)

INDICATORS = compile_patterns(
    r"\bexperian\b",
    r"\bexperian\s{1,5}credit\s{1,5}report\b",
    r"\bexperian\s{1,5}information\s{1,5}solutions\b",
    r"\bexperian\b.{0,40}\bcredit\b.{0,40}\bbureau\b",
)

REPORT_DATE_PATTERNS = report_date_patterns(
    r"\breport\s{1,5}date",
    r"\bdate\s{1,5}of\s{1,5}report",
    r"\breport\s{1,5}generated\s{1,5}on",
)

SECTION_STRATEGIES = section_strategies(
    r"\baccount[ \t]{1,5}details\b",
    r"\bcredit[ \t]{1,5}account\b",
    r"\bloan[ \t]{1,5}account\b",
)

MIN_SECTION_LENGTH = 50


class ExperianParser:
    """Parser for Experian reports.

    Args:
        include_inactive: Keep non-ACTIVE rows of the summary table
    """

    bureau = BureauKind.EXPERIAN
    id_prefix = "experian"

    def __init__(self, include_inactive: bool = False):
        self.table_parser = ExperianTableParser(
            include_inactive=include_inactive, id_prefix=self.id_prefix
        )

    def can_parse(self, text: str) -> bool:
        return matches_any(text, INDICATORS)

    def parse_report(self, text: str) -> ParseResult:
        summary = extract_summary(
            text, self.bureau, REPORT_DATE_PATTERNS, include_report_number=True
        )
        return assemble_result(self.bureau, summary, self.extract_accounts(text))

    def extract_accounts(self, text: str) -> list[CreditAccount]:
        accounts = self.table_parser.parse(text)
        if accounts:
            return accounts

        logger.debug("No Experian table rows accepted, splitting into sections")
        return extract_section_accounts(
            text, SECTION_STRATEGIES, self.id_prefix, MIN_SECTION_LENGTH
        )
