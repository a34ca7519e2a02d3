"""Field extractors shared by every bureau strategy.

Every extractor is a pure function over a text span. Most follow the same
shape: try an ordered list of regex alternatives, take the first capturing
group of the first alternative that matches, then clean and convert it.
Quantifiers are bounded where possible to keep worst-case matching time
predictable on hostile input.
"""

import math
import re
from datetime import datetime

from credit_reports.core.banks import find_institution, normalize_bank_name
from credit_reports.schemas.internal import (
    AccountStatus,
    AccountSubType,
    AccountType,
    CreditAccount,
    PaymentHistory,
)

__all__ = [
    "normalize_bank_name",
    "extract_bank_name",
    "extract_account_number",
    "determine_account_type",
    "extract_account_status",
    "extract_numeric_value",
    "extract_date",
    "parse_date",
    "calculate_confidence_score",
]

# Label/value separator: "Balance: 10,000", "Balance - 10,000", "Balance 10,000"
SEP = r"\s{0,5}[:\-]?\s{0,5}"
# NOTE: OCR output renders the rupee sign as "Rs", "Rs.", "INR" or "₹".
AMOUNT = r"(?:rs\.?\s{0,3}|inr\s{0,3}|₹\s{0,3})?(\d{1,15}(?:,\d{1,3}){0,6}(?:\.\d{1,2})?)"
DATE = (
    r"(\d{1,2}[-/.]\d{1,2}[-/.]\d{4}"
    r"|\d{1,2}[-\s][A-Za-z]{3,9},?[-\s]\d{4}"
    r"|\d{4}-\d{2}-\d{2})"
)

DATE_FORMATS = [
    "%d-%m-%Y",  # 15-01-2025
    "%d/%m/%Y",  # 15/01/2025
    "%d.%m.%Y",  # 15.01.2025
    "%Y-%m-%d",  # 2025-01-15
    "%d-%b-%Y",  # 15-Jan-2025
    "%d-%B-%Y",  # 15-January-2025
    "%d %b %Y",  # 15 Jan 2025
    "%d %B %Y",  # 15 January 2025
]

SCORE_PROVIDERS = ("CIBIL", "Experian", "Equifax", "CRIF")


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE | re.MULTILINE) for p in patterns)


# Identity
BANK_LABEL_PATTERN = re.compile(
    r"\b(?:member\s+name|lender(?:\s+name)?|bank(?:\s+name)?|institution)\s{0,3}:\s{0,5}"
    r"([A-Za-z][A-Za-z&.'\s]{1,60}?)\s*(?:$|\baccount\b|\ba/c\b|\blimit\b|\btype\b|\bstatus\b|\d)",
    re.IGNORECASE | re.MULTILINE,
)
ACCOUNT_NUMBER_PATTERNS = _compile(
    r"\b(?:account\s*(?:number|no\.?)|a/c\s*(?:number|no\.?))" + SEP + r"([X*\d]{4,30})",
    r"\bcard\s*(?:number|no\.?)" + SEP + r"([X*\d]{4,30})",
    r"(?<![\w*])([X*]{4,20}\d{4,20})(?!\d)",
)

# Money
CREDIT_LIMIT_PATTERNS = _compile(
    r"\bcredit\s+limit" + SEP + AMOUNT,
    r"\bsanction(?:ed)?\s+amount" + SEP + AMOUNT,
    r"\bhigh\s+credit" + SEP + AMOUNT,
    r"\blimit" + SEP + AMOUNT,
)
CURRENT_BALANCE_PATTERNS = _compile(
    r"\bcurrent\s+balance" + SEP + AMOUNT,
    r"\bbalance" + SEP + AMOUNT,
)
OUTSTANDING_PATTERNS = _compile(
    r"\b(?:amount|current|total)\s+outstanding" + SEP + AMOUNT,
    r"\boutstanding(?:\s+(?:amount|balance))?" + SEP + AMOUNT,
)
OVERDUE_PATTERNS = _compile(
    r"\b(?:amount\s+)?overdue(?:\s+amount)?" + SEP + AMOUNT,
)
MINIMUM_DUE_PATTERNS = _compile(
    r"\bminimum\s+(?:amount\s+)?due" + SEP + AMOUNT,
    r"\bmin\.?\s+(?:amount\s+)?due" + SEP + AMOUNT,
)
EMI_PATTERNS = _compile(
    r"\bemi(?:\s+amount)?" + SEP + AMOUNT,
    r"\bmonthly\s+(?:payment|instal?lment)" + SEP + AMOUNT,
    r"\binstal?lment(?:\s+amount)?" + SEP + AMOUNT,
)
ANNUAL_FEE_PATTERNS = _compile(
    r"\b(?:annual|yearly)\s+fee" + SEP + AMOUNT,
)
LATE_PAYMENT_CHARGES_PATTERNS = _compile(
    r"\blate\s+(?:payment\s+)?(?:charges?|fees?)" + SEP + AMOUNT,
)
INTEREST_RATE_PATTERNS = _compile(
    r"\b(?:interest\s+rate|rate\s+of\s+interest|roi)" + SEP + r"(\d{1,2}(?:\.\d{1,2})?)\s{0,3}%",
    r"\b(?:apr|annual\s+percentage\s+rate)" + SEP + r"(\d{1,2}(?:\.\d{1,2})?)\s{0,3}%",
    r"(\d{1,2}(?:\.\d{1,2})?)\s{0,3}%\s{1,3}(?:p\.a\.\s{1,3})?interest",
)

# Dates
OPEN_DATE_PATTERNS = _compile(
    r"\b(?:account\s+opened|date\s+opened|date\s+of\s+opening|open(?:ed)?\s+date)" + SEP + DATE,
    r"\bopened(?:\s+on)?" + SEP + DATE,
)
LAST_PAYMENT_DATE_PATTERNS = _compile(
    r"\b(?:last\s+payment(?:\s+date)?|date\s+of\s+last\s+payment)" + SEP + DATE,
    r"\b(?:payment\s+date|last\s+paid)" + SEP + DATE,
)
NEXT_DUE_DATE_PATTERNS = _compile(
    r"\b(?:next\s+due\s+date|payment\s+due\s+date|due\s+date)" + SEP + DATE,
    r"\bdue\s+on" + SEP + DATE,
)
LAST_REPORTED_DATE_PATTERNS = _compile(
    r"\b(?:date\s+reported|last\s+reported(?:\s+date)?|reporting\s+date)" + SEP + DATE,
    r"\breported\s+on" + SEP + DATE,
)

# Loan details
TENURE_PATTERNS = _compile(
    r"\b(?:tenure|term|duration)" + SEP + r"(\d{1,3})\s{0,3}(months?|mths?|yrs?|years?)\b",
    r"\b(\d{1,3})\s{0,3}(months?|mths?|yrs?|years?)\s{1,3}tenure\b",
)
COLLATERAL_PATTERN = re.compile(
    r"\b(?:collateral|security)(?:\s+(?:type|details))?\s{0,3}:\s{0,5}([^\n]{2,80})",
    re.IGNORECASE,
)
GUARANTOR_PATTERN = re.compile(
    r"\bguarantor(?:\s+name)?\s{0,3}:\s{0,5}([^\n]{2,80})",
    re.IGNORECASE,
)

# Payment history
MONTHS_REPORTED_PATTERNS = _compile(
    r"\b(?:months\s+reported|reported\s+months|total\s+months(?:\s+reported)?)" + SEP + r"(\d{1,3})\b",
)
DELAYED_PAYMENTS_PATTERNS = _compile(
    r"\b(?:delayed|late)(?:\s+payments?)?" + SEP + r"(\d{1,3})\b",
)
ON_TIME_PAYMENTS_PATTERNS = _compile(
    r"\b(?:on[\s-]time|timely)(?:\s+payments?)?" + SEP + r"(\d{1,3})\b",
)
HIGHEST_DELAY_PATTERNS = _compile(
    r"\b(?:highest|max(?:imum)?)\s+delay(?:\s+days)?" + SEP + r"(\d{1,4})\b",
    r"\bmax(?:imum)?\s+dpd" + SEP + r"(\d{1,4})\b",
)

# Report-level
SCORE_PATTERNS = _compile(
    r"\b(?:credit\s+)?score" + SEP + r"(\d{3})(?!\d)",
    r"\b(?:cibil|experian|equifax|crif)\s+score" + SEP + r"(\d{3})(?!\d)",
    r"\bscore" + SEP + r"(\d{3})\s{0,3}(?:out\s+of|/)\s{0,3}(?:900|850|999)",
)
INQUIRY_PATTERNS = _compile(
    r"\b(?:recent\s+)?(?:inquir|enquir)(?:y|ies)" + SEP + r"(\d{1,4})\b",
    r"\b(\d{1,4})\s{1,3}(?:inquir|enquir)(?:y|ies)\b",
)
REPORT_NUMBER_PATTERN = re.compile(
    r"\breport\s+(?:number|no\.?|id)" + SEP + r"([A-Z0-9][A-Z0-9\-]{3,40})",
    re.IGNORECASE,
)

# Account type keyword groups, checked in order.
_LOAN_SUBTYPES = [
    (re.compile(r"\b(?:home|housing|mortgage)\b"), AccountSubType.HOME_LOAN),
    (re.compile(r"\bpersonal\b"), AccountSubType.PERSONAL_LOAN),
    (re.compile(r"\b(?:auto|car|vehicle|two\s+wheeler)\b"), AccountSubType.AUTO_LOAN),
    (re.compile(r"\b(?:business|commercial)\b"), AccountSubType.BUSINESS_LOAN),
    (re.compile(r"\b(?:education|study|student)\b"), AccountSubType.EDUCATION_LOAN),
    (re.compile(r"\bgold\b"), AccountSubType.GOLD_LOAN),
]

_LABELLED_STATUS = [
    (re.compile(r"\bstatus" + SEP + r"(?:active|open|current|regular|standard)\b", re.I), AccountStatus.ACTIVE),
    (re.compile(r"\bstatus" + SEP + r"(?:closed|close)\b", re.I), AccountStatus.CLOSED),
    (re.compile(r"\bstatus" + SEP + r"(?:settled|settlement)\b", re.I), AccountStatus.SETTLED),
    (re.compile(r"\bstatus" + SEP + r"(?:written|write)[\s-]{0,3}off\b", re.I), AccountStatus.WRITTEN_OFF),
    (re.compile(r"\bstatus" + SEP + r"(?:dormant|inactive)\b", re.I), AccountStatus.DORMANT),
]
_BARE_STATUS = [
    (re.compile(r"\b(?:active|open)\b", re.I), AccountStatus.ACTIVE),
    (re.compile(r"\bclosed?\b", re.I), AccountStatus.CLOSED),
    (re.compile(r"\bsettled\b", re.I), AccountStatus.SETTLED),
    (re.compile(r"\b(?:written|write)[\s-]{0,3}off\b", re.I), AccountStatus.WRITTEN_OFF),
    (re.compile(r"\b(?:dormant|inactive)\b", re.I), AccountStatus.DORMANT),
]


def extract_bank_name(text: str) -> str | None:
    """Find the lender name in a text span.

    A labelled field ("Member Name:", "Lender:", "Bank:") wins over a bare
    mention of a known institution. The raw value is returned; callers
    normalize it.
    """
    if not text:
        return None

    match = BANK_LABEL_PATTERN.search(text)
    if match:
        name = re.sub(r"\s+", " ", match.group(1)).strip(" .")
        if len(name) >= 2:
            return name

    return find_institution(text)


def extract_account_number(text: str) -> str | None:
    """Find a masked/partial account number (labelled first, then bare)."""
    for pattern in ACCOUNT_NUMBER_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def determine_account_type(text: str) -> tuple[AccountType, AccountSubType | None]:
    """Classify an account from its description.

    Order: credit card, loan (with sub-type), savings, current, overdraft,
    investment. Short abbreviations only count as whole words.

    Returns:
        (account_type, account_sub_type) where the sub-type is None for
        non-card, non-loan accounts
    """
    lower = text.lower()

    if "credit card" in lower or re.search(r"\bcc\b", lower):
        if re.search(r"(?<!un)secured", lower):
            return AccountType.CREDIT_CARD, AccountSubType.SECURED_CARD
        return AccountType.CREDIT_CARD, AccountSubType.UNSECURED_CARD

    if "loan" in lower or re.search(r"\bemi\b", lower):
        for pattern, sub_type in _LOAN_SUBTYPES:
            if pattern.search(lower):
                return AccountType.LOAN, sub_type
        return AccountType.LOAN, AccountSubType.PERSONAL_LOAN

    if "savings" in lower or re.search(r"\bsb\b", lower):
        return AccountType.SAVINGS, None
    if re.search(r"\bcurrent\s+(?:account|a/c)\b|\bca\b", lower):
        return AccountType.CURRENT, None
    if "overdraft" in lower or re.search(r"\bod\b", lower):
        return AccountType.OVERDRAFT, None
    if (
        "fixed deposit" in lower
        or "mutual fund" in lower
        or "investment" in lower
        or re.search(r"\bfd\b", lower)
    ):
        return AccountType.INVESTMENT, None

    return AccountType.UNKNOWN, None


def extract_account_status(text: str) -> AccountStatus | None:
    """Read the account status; None when the text does not say.

    A labelled "Status: ..." value beats a bare keyword anywhere in the span.
    """
    for rules in (_LABELLED_STATUS, _BARE_STATUS):
        for pattern, status in rules:
            if pattern.search(text):
                return status
    return None


def extract_numeric_value(text: str, patterns: tuple[re.Pattern, ...]) -> float | None:
    """Return the first parseable number captured by ``patterns``."""
    for pattern in patterns:
        match = pattern.search(text)
        if not match:
            continue
        try:
            value = float(match.group(1).replace(",", ""))
        except ValueError:
            continue
        if not math.isnan(value):
            return value
    return None


def parse_date(text: str) -> str | None:
    """Parse a printed date into ISO ``YYYY-MM-DD``.

    Bureau reports in India print dates day-first, so "05-06-2023" is
    5 June 2023. Returns None for anything that is not a real date.
    """
    if not text:
        return None
    cleaned = re.sub(r"[\s,]+", " ", text.strip())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def extract_date(text: str, patterns: tuple[re.Pattern, ...]) -> str | None:
    """Return the first valid date captured by ``patterns`` as ISO."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            parsed = parse_date(match.group(1))
            if parsed:
                return parsed
    return None


def extract_credit_limit(text: str) -> float | None:
    return extract_numeric_value(text, CREDIT_LIMIT_PATTERNS)


def extract_current_balance(text: str) -> float | None:
    return extract_numeric_value(text, CURRENT_BALANCE_PATTERNS)


def extract_outstanding_amount(text: str) -> float | None:
    return extract_numeric_value(text, OUTSTANDING_PATTERNS)


def extract_overdue_amount(text: str) -> float | None:
    return extract_numeric_value(text, OVERDUE_PATTERNS)


def extract_minimum_amount_due(text: str) -> float | None:
    return extract_numeric_value(text, MINIMUM_DUE_PATTERNS)


def extract_emi_amount(text: str) -> float | None:
    return extract_numeric_value(text, EMI_PATTERNS)


def extract_annual_fee(text: str) -> float | None:
    return extract_numeric_value(text, ANNUAL_FEE_PATTERNS)


def extract_late_payment_charges(text: str) -> float | None:
    return extract_numeric_value(text, LATE_PAYMENT_CHARGES_PATTERNS)


def extract_interest_rate(text: str) -> float | None:
    return extract_numeric_value(text, INTEREST_RATE_PATTERNS)


def extract_account_open_date(text: str) -> str | None:
    return extract_date(text, OPEN_DATE_PATTERNS)


def extract_last_payment_date(text: str) -> str | None:
    return extract_date(text, LAST_PAYMENT_DATE_PATTERNS)


def extract_next_due_date(text: str) -> str | None:
    return extract_date(text, NEXT_DUE_DATE_PATTERNS)


def extract_last_reported_date(text: str) -> str | None:
    return extract_date(text, LAST_REPORTED_DATE_PATTERNS)


def extract_tenure(text: str) -> int | None:
    """Loan tenure in months; year figures are converted."""
    for pattern in TENURE_PATTERNS:
        match = pattern.search(text)
        if match:
            value = int(match.group(1))
            if match.group(2).lower().startswith("y"):
                value *= 12
            return value
    return None


def extract_collateral(text: str) -> str | None:
    match = COLLATERAL_PATTERN.search(text)
    return match.group(1).strip() if match else None


def extract_guarantor(text: str) -> str | None:
    match = GUARANTOR_PATTERN.search(text)
    return match.group(1).strip() if match else None


def _first_int(text: str, patterns: tuple[re.Pattern, ...]) -> int | None:
    value = extract_numeric_value(text, patterns)
    return int(value) if value is not None else None


def extract_payment_history(text: str) -> PaymentHistory | None:
    """Collect repayment counters; None when none of them is printed."""
    history = PaymentHistory(
        total_months_reported=_first_int(text, MONTHS_REPORTED_PATTERNS),
        delayed_payments=_first_int(text, DELAYED_PAYMENTS_PATTERNS),
        on_time_payments=_first_int(text, ON_TIME_PAYMENTS_PATTERNS),
        highest_delay_days=_first_int(text, HIGHEST_DELAY_PATTERNS),
    )
    if all(value is None for value in history.model_dump().values()):
        return None
    return history


def extract_score_provider(text: str, default: str | None = None) -> str | None:
    """First bureau brand mentioned in the text, else ``default``."""
    for provider in SCORE_PROVIDERS:
        if re.search(rf"\b{provider}\b", text, re.IGNORECASE):
            return provider
    return default


def extract_credit_score(text: str, default_provider: str | None = None) -> tuple[int | None, str | None]:
    """Extract the bureau score and who issued it.

    Only scores within 300..900 are accepted; out-of-range captures are
    skipped and the remaining alternatives are tried.

    Returns:
        (score, provider), or (None, None) when no valid score is printed
    """
    if not text:
        return None, None
    for pattern in SCORE_PATTERNS:
        for match in pattern.finditer(text):
            score = int(match.group(1))
            if 300 <= score <= 900:
                return score, extract_score_provider(text, default_provider)
    return None, None


def extract_recent_inquiries(text: str) -> int | None:
    return _first_int(text, INQUIRY_PATTERNS)


def extract_report_number(text: str) -> str | None:
    match = REPORT_NUMBER_PATTERN.search(text)
    return match.group(1) if match else None


def calculate_confidence_score(account: CreditAccount) -> float:
    """Heuristic completeness score for a section-extracted account.

    0.1 base, +0.2 bank name, +0.2 account number, +0.15 known type,
    +0.1 status read from the text, +0.15 any balance figure, +0.1 open date,
    +0.1 when five or more fields were extracted. Capped at 1.0.
    """
    score = 0.1

    if account.bank_name:
        score += 0.2
    if account.account_number:
        score += 0.2
    if account.account_type != AccountType.UNKNOWN:
        score += 0.15
    if "account_status" in account.extracted_fields:
        score += 0.1
    if any(
        value is not None
        for value in (account.credit_limit, account.current_balance, account.outstanding_amount)
    ):
        score += 0.15
    if account.account_open_date:
        score += 0.1
    if len(account.extracted_fields) >= 5:
        score += 0.1

    return round(min(score, 1.0), 4)
