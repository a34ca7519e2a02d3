"""Token-stream parser for Experian's "SUMMARY: CREDIT ACCOUNT INFORMATION" table.

Text extraction flattens the table into runs of whitespace-separated
tokens with no reliable column offsets (lender names and account types
span a variable number of words). Each entry is therefore walked with an
explicit state machine:

    ExpectLender -> ExpectType -> ExpectAccountNumber -> ExpectOwnership
    -> ExpectDateReported -> ExpectStatus -> ExpectDateOpened -> ExpectAmounts

Each state has its own transition function, and token classification is
done by small pure predicates, so every consumption rule can be tested in
isolation.

Example entry::

    Acct 1 HDFC BANK CREDIT CARD XXXX1234 Individual 01-01-2023 ACTIVE 20220505 50,000 25,000 0
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

from credit_reports.core.banks import normalize_bank_name
from credit_reports.parsers.validation import has_valid_identity
from credit_reports.schemas.internal import (
    AccountStatus,
    AccountSubType,
    AccountType,
    CreditAccount,
)

logger = logging.getLogger(__name__)

START_ANCHOR = re.compile(r"SUMMARY:\s{0,5}CREDIT\s{1,5}ACCOUNT\s{1,5}INFORMATION", re.IGNORECASE)
END_ANCHOR = re.compile(r"CREDIT\s{1,5}ACCOUNT\s{1,5}INFORMATION\s{1,5}DETAILS", re.IGNORECASE)
ENTRY_ANCHOR = re.compile(r"\bAcct\s{1,5}\d{1,4}\b", re.IGNORECASE)
BLANK_LINE = re.compile(r"\n[ \t]*\n")

ACCOUNT_TYPE_STARTERS = frozenset(
    {
        "CREDIT",
        "PERSONAL",
        "HOME",
        "CONSUMER",
        "TWO",
        "AUTO",
        "BUSINESS",
        "EDUCATION",
        "GOLD",
        "OVERDRAFT",
        "SAVINGS",
        "CURRENT",
    }
)
ACCOUNT_TYPE_EXTENSIONS = frozenset({"LOAN", "CARD", "CARDS", "ACCOUNT", "WHEELER"})
MAX_TYPE_EXTENSIONS = 2
OWNERSHIP_MARKERS = frozenset({"INDIVIDUAL", "JOINT"})
STATUS_KEYWORDS = frozenset({"ACTIVE", "CLOSED", "SETTLED", "WRITTEN OFF", "DORMANT"})

_DATE_REPORTED = re.compile(r"^\d{2}-\d{2}-\d{4}$")
_DATE_OPENED = re.compile(r"^\d{8}$")
_AMOUNT = re.compile(r"^(?:\d{1,15}(?:,\d{1,3}){0,6}(?:\.\d{1,2})?|-)$")


# Token predicates


def is_account_type_starter(token: str) -> bool:
    return token.strip().upper() in ACCOUNT_TYPE_STARTERS


def is_account_type_extension(token: str) -> bool:
    return token.strip().upper() in ACCOUNT_TYPE_EXTENSIONS


def is_ownership(token: str) -> bool:
    return token.strip().upper() in OWNERSHIP_MARKERS


def is_date_reported(token: str) -> bool:
    return bool(_DATE_REPORTED.match(token.strip()))


def is_status(token: str) -> bool:
    return token.strip().upper() in STATUS_KEYWORDS


def is_date_opened(token: str) -> bool:
    return bool(_DATE_OPENED.match(token.strip()))


def is_amount(token: str) -> bool:
    """Digits with optional thousands commas, or a bare "-" placeholder."""
    return bool(_AMOUNT.match(token.strip()))


# State machine


class TableState(Enum):
    EXPECT_LENDER = auto()
    EXPECT_TYPE = auto()
    EXPECT_ACCOUNT_NUMBER = auto()
    EXPECT_OWNERSHIP = auto()
    EXPECT_DATE_REPORTED = auto()
    EXPECT_STATUS = auto()
    EXPECT_DATE_OPENED = auto()
    EXPECT_AMOUNTS = auto()
    DONE = auto()


@dataclass
class TableRow:
    """Raw string fields read from one table entry."""

    lender: str = ""
    account_type: str = ""
    account_number: str = ""
    ownership: str | None = None
    date_reported: str | None = None
    status: str = ""
    date_opened: str | None = None
    amounts: list[str] = field(default_factory=list)

    def amount_at(self, position: int) -> str | None:
        return self.amounts[position] if position < len(self.amounts) else None

    @property
    def sanctioned_amount(self) -> str | None:
        return self.amount_at(0)

    @property
    def current_balance(self) -> str | None:
        return self.amount_at(1)

    @property
    def overdue_amount(self) -> str | None:
        return self.amount_at(2)


Transition = Callable[[list[str], int, TableRow], tuple[TableState, int]]


def expect_lender(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    """Consume tokens until an account-type starter keyword appears."""
    lender_tokens = []
    while pos < len(tokens) and not is_account_type_starter(tokens[pos]):
        lender_tokens.append(tokens[pos])
        pos += 1
    row.lender = " ".join(lender_tokens)
    if pos >= len(tokens):
        return TableState.DONE, pos
    return TableState.EXPECT_TYPE, pos


def expect_type(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    """Consume the starter keyword plus up to two continuation tokens."""
    type_tokens = [tokens[pos]]
    pos += 1
    while (
        pos < len(tokens)
        and len(type_tokens) <= MAX_TYPE_EXTENSIONS
        and is_account_type_extension(tokens[pos])
    ):
        type_tokens.append(tokens[pos])
        pos += 1
    row.account_type = " ".join(type_tokens)
    return TableState.EXPECT_ACCOUNT_NUMBER, pos


def expect_account_number(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    if pos < len(tokens):
        row.account_number = tokens[pos]
        pos += 1
    return TableState.EXPECT_OWNERSHIP, pos


def expect_ownership(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    if pos < len(tokens) and is_ownership(tokens[pos]):
        row.ownership = tokens[pos]
        pos += 1
    return TableState.EXPECT_DATE_REPORTED, pos


def expect_date_reported(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    if pos < len(tokens) and is_date_reported(tokens[pos]):
        row.date_reported = tokens[pos]
        pos += 1
    return TableState.EXPECT_STATUS, pos


def expect_status(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    """Read the status; "WRITTEN OFF" spans two tokens."""
    if pos + 1 < len(tokens) and is_status(f"{tokens[pos]} {tokens[pos + 1]}"):
        row.status = f"{tokens[pos]} {tokens[pos + 1]}"
        pos += 2
    elif pos < len(tokens) and is_status(tokens[pos]):
        row.status = tokens[pos]
        pos += 1
    return TableState.EXPECT_DATE_OPENED, pos


def expect_date_opened(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    if pos < len(tokens) and is_date_opened(tokens[pos]):
        row.date_opened = tokens[pos]
        pos += 1
    return TableState.EXPECT_AMOUNTS, pos


def expect_amounts(tokens: list[str], pos: int, row: TableRow) -> tuple[TableState, int]:
    """Collect every remaining amount-like token in order."""
    row.amounts = [token for token in tokens[pos:] if is_amount(token)]
    return TableState.DONE, len(tokens)


TRANSITIONS: dict[TableState, Transition] = {
    TableState.EXPECT_LENDER: expect_lender,
    TableState.EXPECT_TYPE: expect_type,
    TableState.EXPECT_ACCOUNT_NUMBER: expect_account_number,
    TableState.EXPECT_OWNERSHIP: expect_ownership,
    TableState.EXPECT_DATE_REPORTED: expect_date_reported,
    TableState.EXPECT_STATUS: expect_status,
    TableState.EXPECT_DATE_OPENED: expect_date_opened,
    TableState.EXPECT_AMOUNTS: expect_amounts,
}


def parse_entry(entry: str) -> TableRow:
    """Walk one entry's tokens through the state machine."""
    tokens = entry.split()
    row = TableRow()
    state, pos = TableState.EXPECT_LENDER, 0
    while state is not TableState.DONE:
        state, pos = TRANSITIONS[state](tokens, pos, row)
    return row


# Block and entry segmentation


def extract_summary_block(text: str) -> str | None:
    """Return the table block, or None when the start anchor is missing.

    The block ends where the detailed section begins. If that heading is
    absent the block ends at the first blank line after the last entry
    anchor (or at the end of the text), so page footers that follow the
    table are not read as amounts of the last row.
    """
    start = START_ANCHOR.search(text)
    if not start:
        return None
    end = END_ANCHOR.search(text, start.end())
    if end:
        return text[start.end() : end.start()]

    block = text[start.end() :]
    anchors = list(ENTRY_ANCHOR.finditer(block))
    if anchors:
        blank = BLANK_LINE.search(block, anchors[-1].end())
        if blank:
            return block[: blank.start()]
    return block


def split_entries(block: str) -> list[str]:
    """Split the block on "Acct <n>" anchors; text before the first is header."""
    anchors = list(ENTRY_ANCHOR.finditer(block))
    entries = []
    for index, anchor in enumerate(anchors):
        stop = anchors[index + 1].start() if index + 1 < len(anchors) else len(block)
        entry = block[anchor.end() : stop].strip()
        if entry:
            entries.append(entry)
    return entries


# Row interpretation


def map_account_type(type_text: str) -> AccountType:
    lower = type_text.lower()
    if "credit card" in lower:
        return AccountType.CREDIT_CARD
    if "loan" in lower or "wheeler" in lower:
        return AccountType.LOAN
    if "overdraft" in lower:
        return AccountType.OVERDRAFT
    if "savings" in lower:
        return AccountType.SAVINGS
    if "current" in lower:
        return AccountType.CURRENT
    return AccountType.UNKNOWN


def map_account_sub_type(type_text: str) -> AccountSubType | None:
    lower = type_text.lower()
    if "personal loan" in lower or "consumer loan" in lower:
        return AccountSubType.PERSONAL_LOAN
    if "home loan" in lower:
        return AccountSubType.HOME_LOAN
    if "auto loan" in lower or "two wheeler" in lower:
        return AccountSubType.AUTO_LOAN
    if "business loan" in lower:
        return AccountSubType.BUSINESS_LOAN
    if "education loan" in lower:
        return AccountSubType.EDUCATION_LOAN
    if "gold loan" in lower:
        return AccountSubType.GOLD_LOAN
    return None


def map_account_status(status_text: str) -> AccountStatus:
    normalized = re.sub(r"\s+", "_", status_text.strip().lower())
    try:
        return AccountStatus(normalized)
    except ValueError:
        return AccountStatus.UNKNOWN


def parse_amount(token: str | None) -> float | None:
    """Convert an amount token; the "-" placeholder means not reported."""
    if token is None or token.strip() in ("", "-"):
        return None
    try:
        return float(token.replace(",", ""))
    except ValueError:
        return None


def parse_date_opened(token: str | None) -> str | None:
    """``YYYYMMDD`` -> ``YYYY-MM-DD``; impossible calendar dates give None."""
    if not token:
        return None
    try:
        return datetime.strptime(token, "%Y%m%d").date().isoformat()
    except ValueError:
        return None


def row_confidence(row: TableRow) -> float:
    """0.1 base, +0.3 lender, +0.3 type keyword, +0.2 status keyword, +0.2 balance."""
    confidence = 0.1
    if len(row.lender) > 3:
        confidence += 0.3
    if row.account_type and is_account_type_starter(row.account_type.split()[0]):
        confidence += 0.3
    if row.status and is_status(row.status):
        confidence += 0.2
    balance = row.current_balance
    if balance and is_amount(balance) and balance != "-":
        confidence += 0.2
    return round(min(confidence, 1.0), 4)


def is_acceptable_row(row: TableRow, include_inactive: bool = False) -> bool:
    """Lender, type and status are required; only ACTIVE rows pass by default."""
    if not (row.lender and row.account_type and row.status):
        return False
    return include_inactive or row.status.upper() == "ACTIVE"


def row_to_account(row: TableRow, account_id: str, raw_data: str) -> CreditAccount:
    credit_limit = parse_amount(row.sanctioned_amount)
    current_balance = parse_amount(row.current_balance)
    overdue_amount = parse_amount(row.overdue_amount)
    account_open_date = parse_date_opened(row.date_opened)

    extracted_fields = ["bank_name", "account_type", "account_status"]
    if row.account_number:
        extracted_fields.append("account_number")
    if account_open_date:
        extracted_fields.append("account_open_date")
    if credit_limit is not None:
        extracted_fields.append("credit_limit")
    if current_balance is not None:
        extracted_fields.extend(["current_balance", "outstanding_amount"])
    if overdue_amount is not None:
        extracted_fields.append("overdue_amount")

    available_credit = None
    if credit_limit is not None and current_balance is not None:
        available_credit = max(0.0, credit_limit - current_balance)

    return CreditAccount(
        account_id=account_id,
        account_type=map_account_type(row.account_type),
        account_sub_type=map_account_sub_type(row.account_type),
        bank_name=normalize_bank_name(row.lender),
        account_number=row.account_number,
        account_status=map_account_status(row.status),
        credit_limit=credit_limit,
        current_balance=current_balance,
        outstanding_amount=current_balance,
        available_credit=available_credit,
        overdue_amount=overdue_amount,
        account_open_date=account_open_date,
        confidence_score=row_confidence(row),
        raw_data=raw_data,
        extracted_fields=extracted_fields,
    )


class ExperianTableParser:
    """Reads accounts from the Experian summary table.

    Example:
        >>> parser = ExperianTableParser()
        >>> accounts = parser.parse(report_text)
        >>> [a.bank_name for a in accounts]
        ['HDFC Bank']
    """

    def __init__(self, include_inactive: bool = False, id_prefix: str = "experian"):
        """
        Args:
            include_inactive: Keep rows whose status is not ACTIVE
            id_prefix: Prefix for generated account ids
        """
        self.include_inactive = include_inactive
        self.id_prefix = id_prefix

    def parse(self, text: str) -> list[CreditAccount]:
        """Return accepted table rows as accounts (empty when no table)."""
        block = extract_summary_block(text or "")
        if block is None:
            logger.debug("Experian summary table anchor not found")
            return []

        entries = split_entries(block)
        accounts: list[CreditAccount] = []
        skipped_status = 0
        for entry in entries:
            row = parse_entry(entry)
            if not is_acceptable_row(row, self.include_inactive):
                if row.status and row.status.upper() != "ACTIVE":
                    skipped_status += 1
                continue

            account = row_to_account(row, f"{self.id_prefix}_{len(accounts) + 1}", entry)
            if has_valid_identity(account):
                accounts.append(account)

        if skipped_status:
            logger.info(
                "Skipped %d non-active Experian table rows out of %d entries",
                skipped_status,
                len(entries),
            )
        logger.debug("Parsed %d accounts from %d Experian table entries", len(accounts), len(entries))
        return accounts
