"""Build the final ParseResult from a bureau's summary and accounts.

Counts and money aggregates are always recomputed here from the final
account list; whatever a strategy put in those summary fields is replaced.
"""

from credit_reports.schemas.internal import (
    AccountStatus,
    AccountType,
    BureauKind,
    CreditAccount,
    CreditReportSummary,
    ParseResult,
)


def _total(values: list[float | None]) -> float | None:
    present = [value for value in values if value is not None]
    return sum(present) if present else None


def assemble_result(
    bureau: BureauKind,
    summary: CreditReportSummary,
    accounts: list[CreditAccount],
) -> ParseResult:
    """Attach recomputed counts and aggregates to ``summary``.

    Args:
        bureau: Bureau reported for the result
        summary: Report-level metadata (date, number, score, errors)
        accounts: Final, already-validated accounts in emission order

    Returns:
        ParseResult whose summary agrees with ``accounts``
    """
    recomputed = summary.model_copy(
        update={
            "total_accounts": len(accounts),
            "active_accounts": sum(1 for a in accounts if a.account_status == AccountStatus.ACTIVE),
            "closed_accounts": sum(1 for a in accounts if a.account_status == AccountStatus.CLOSED),
            "credit_cards": sum(1 for a in accounts if a.account_type == AccountType.CREDIT_CARD),
            "loans": sum(1 for a in accounts if a.account_type == AccountType.LOAN),
            "total_credit_limit": _total([a.credit_limit for a in accounts]),
            "total_outstanding": _total([a.outstanding_amount for a in accounts]),
            "total_available_credit": _total([a.available_credit for a in accounts]),
            "errors": list(summary.errors),
        }
    )
    return ParseResult(bureau=bureau, summary=recomputed, accounts=list(accounts))


def empty_result(errors: list[str], bureau: BureauKind = BureauKind.UNKNOWN) -> ParseResult:
    """Worst-case result: no accounts, only the collected errors."""
    return ParseResult(bureau=bureau, summary=CreditReportSummary(errors=list(errors)), accounts=[])
