"""Equifax report parser.

Only report-level metadata is read. Account extraction for Equifax layouts
is left to the registry's generic fallback, which runs whenever a matched
parser returns no accounts.
"""

from credit_reports.parsers.assembler import assemble_result
from credit_reports.parsers.bureaus.base import (
    compile_patterns,
    extract_summary,
    matches_any,
    report_date_patterns,
)
from credit_reports.schemas.internal import BureauKind, ParseResult

INDICATORS = compile_patterns(
    r"\bequifax\b",
    r"\bequifax\s{1,5}credit\s{1,5}report\b",
    r"\bequifax\s{1,5}credit\s{1,5}information\s{1,5}services\b",
)

REPORT_DATE_PATTERNS = report_date_patterns(
    r"\breport\s{1,5}date",
    r"\bdate\s{1,5}of\s{1,5}report",
)


class EquifaxParser:
    bureau = BureauKind.EQUIFAX

    def can_parse(self, text: str) -> bool:
        return matches_any(text, INDICATORS)

    def parse_report(self, text: str) -> ParseResult:
        summary = extract_summary(text, self.bureau, REPORT_DATE_PATTERNS)
        return assemble_result(self.bureau, summary, [])
