"""CRIF High Mark report parser."""

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
    r"\bcrif\b",
    r"\bhigh\s{1,5}mark\b",
    r"\bcrif\s{1,5}high\s{1,5}mark\b",
    r"\bcrif\b.{0,40}\bcredit\b.{0,40}\breport\b",
    r"\bhigh\s{1,5}mark\b.{0,40}\bcredit\b",
)

REPORT_DATE_PATTERNS = report_date_patterns(
    r"\bdate\s{1,5}of\s{1,5}(?:issue|report)",
    r"\breport\s{1,5}date",
    r"\bas\s{1,5}on",
)

SECTION_STRATEGIES = section_strategies(
    r"\baccount[ \t]{1,5}information\b",
    r"\bcredit[ \t]{1,5}facility\b",
    r"\baccount[ \t]{1,5}details\b",
)

MIN_SECTION_LENGTH = 100


class CRIFParser:
    """Parser for CRIF High Mark reports."""

    bureau = BureauKind.CRIF
    id_prefix = "crif"

    def can_parse(self, text: str) -> bool:
        return matches_any(text, INDICATORS)

    def parse_report(self, text: str) -> ParseResult:
        summary = extract_summary(text, self.bureau, REPORT_DATE_PATTERNS)
        accounts = extract_section_accounts(
            text, SECTION_STRATEGIES, self.id_prefix, MIN_SECTION_LENGTH
        )
        return assemble_result(self.bureau, summary, accounts)
