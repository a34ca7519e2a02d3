"""TransUnion CIBIL report parser."""

from credit_reports.parsers.assembler import assemble_result
from credit_reports.parsers.bureaus.base import (
    compile_patterns,
    extract_section_accounts,
    extract_summary,
    matches_any,
    report_date_patterns,
)
from credit_reports.parsers.sections import section_strategies
from credit_reports.schemas.internal import BureauKind, ParseResult

INDICATORS = compile_patterns(
    r"\bcibil\b",
    r"\btransunion\s{1,5}cibil\b",
    r"\bcibil\s{1,5}credit\s{1,5}report\b",
    r"\bcibil\b.{0,40}\bscore\b",
    r"\bcredit\s{1,5}information\s{1,5}bureau\b.{0,40}\bindia\b",
)

REPORT_DATE_PATTERNS = report_date_patterns(
    r"\bdate\s{1,5}of\s{1,5}report",
    r"\breport\s{1,5}date",
    r"\bgenerated\s{1,5}on",
)

SECTION_STRATEGIES = section_strategies(
    r"\baccount[ \t]{1,5}details\b",
    r"\bcredit[ \t]{1,5}facility\b",
    r"\bloan[ \t]{1,5}account\b",
)

MIN_SECTION_LENGTH = 100


class CIBILParser:
    """Parser for CIBIL reports.

    CIBIL prints one block per credit facility, each opened by an
    "Account Details" style header with labelled fields underneath.
    """

    bureau = BureauKind.CIBIL
    id_prefix = "cibil"

    def can_parse(self, text: str) -> bool:
        return matches_any(text, INDICATORS)

    def parse_report(self, text: str) -> ParseResult:
        summary = extract_summary(text, self.bureau, REPORT_DATE_PATTERNS)
        accounts = extract_section_accounts(
            text, SECTION_STRATEGIES, self.id_prefix, MIN_SECTION_LENGTH
        )
        return assemble_result(self.bureau, summary, accounts)
