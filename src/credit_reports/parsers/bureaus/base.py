"""Contract and shared building blocks for bureau parsers.

A bureau parser is any object with a ``bureau`` attribute plus
``can_parse`` and ``parse_report`` methods. Parsers do not inherit from a
common base; they compose the helpers below.
"""

import logging
import re
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from credit_reports.parsers import fields
from credit_reports.parsers.accounts import extract_account_from_section
from credit_reports.parsers.sections import split_into_sections
from credit_reports.parsers.validation import is_valid_account
from credit_reports.schemas.internal import (
    BureauKind,
    CreditAccount,
    CreditReportSummary,
    ParseResult,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class BureauParser(Protocol):
    """Strategy for one bureau's report layout."""

    bureau: BureauKind

    def can_parse(self, text: str) -> bool:
        """True when the text carries this bureau's identifying marks."""
        ...

    def parse_report(self, text: str) -> ParseResult:
        """Extract summary and accounts. May raise; the registry catches."""
        ...


def compile_patterns(*patterns: str) -> tuple[re.Pattern, ...]:
    """Compile indicator or label patterns case-insensitively."""
    return tuple(re.compile(p, re.IGNORECASE | re.MULTILINE) for p in patterns)


def report_date_patterns(*labels: str) -> tuple[re.Pattern, ...]:
    """Date patterns for the given report-date labels ("date of report" ...)."""
    return compile_patterns(*(label + fields.SEP + fields.DATE for label in labels))


def matches_any(text: str, patterns: Sequence[re.Pattern]) -> bool:
    if not text:
        return False
    return any(pattern.search(text) for pattern in patterns)


def extract_summary(
    text: str,
    bureau: BureauKind,
    date_patterns: tuple[re.Pattern, ...],
    include_report_number: bool = False,
) -> CreditReportSummary:
    """Read report-level metadata; counts are left for the assembler.

    Args:
        text: Full report text
        bureau: Issuing bureau, used as the score provider when the text
            names none
        date_patterns: Bureau-specific report date patterns
        include_report_number: Also read a report/reference number
    """
    credit_score, score_provider = fields.extract_credit_score(
        text, default_provider=bureau.value
    )
    return CreditReportSummary(
        report_date=fields.extract_date(text, date_patterns),
        report_number=fields.extract_report_number(text) if include_report_number else None,
        credit_score=credit_score,
        score_provider=score_provider,
        recent_inquiries=fields.extract_recent_inquiries(text),
    )


def extract_section_accounts(
    text: str,
    strategies: Sequence[re.Pattern],
    id_prefix: str,
    min_length: int,
) -> list[CreditAccount]:
    """Split the report into sections and keep the accounts that pass validation.

    Account ids are ``<id_prefix>_<n>`` numbered over the accepted accounts.
    """
    sections = split_into_sections(text, strategies, min_length=min_length)
    accounts: list[CreditAccount] = []
    for section in sections:
        account = extract_account_from_section(section, f"{id_prefix}_{len(accounts) + 1}")
        if account is not None and is_valid_account(account):
            accounts.append(account)

    logger.debug(
        "%s: %d valid accounts from %d sections", id_prefix, len(accounts), len(sections)
    )
    return accounts
