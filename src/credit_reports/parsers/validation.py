"""Validation gate applied to extracted accounts.

Rejected accounts are dropped silently: a rejection is an expected outcome
of heuristic extraction, not an error, so nothing is added to the report's
error list.
"""

import logging

from credit_reports.schemas.internal import CreditAccount

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.3
MIN_ACCOUNT_NUMBER_LENGTH = 4


def has_valid_identity(account: CreditAccount) -> bool:
    """Bank name present and account number at least 4 characters long."""
    return bool(account.bank_name and account.bank_name.strip()) and (
        len((account.account_number or "").strip()) >= MIN_ACCOUNT_NUMBER_LENGTH
    )


def has_financial_info(account: CreditAccount) -> bool:
    return any(
        value is not None
        for value in (
            account.credit_limit,
            account.current_balance,
            account.outstanding_amount,
            account.emi_amount,
        )
    )


def is_valid_account(account: CreditAccount) -> bool:
    """Full gate for section and line-window extraction.

    Requires a valid identity, at least one money figure (limit, balance,
    outstanding or EMI) and a confidence score of at least 0.3.
    """
    if not has_valid_identity(account):
        logger.debug("Rejected account %s: missing bank name or account number", account.account_id)
        return False
    if not has_financial_info(account):
        logger.debug("Rejected account %s: no financial figures", account.account_id)
        return False
    if account.confidence_score < MIN_CONFIDENCE:
        logger.debug(
            "Rejected account %s: confidence %.2f below %.2f",
            account.account_id,
            account.confidence_score,
            MIN_CONFIDENCE,
        )
        return False
    return True
