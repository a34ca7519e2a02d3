"""Lending institution metadata used by the field extractors."""

from __future__ import annotations

import re
from typing import Final

# Name fragments recognised in free text. The leftmost mention wins; when two
# fragments start at the same offset the longer one is taken, so "State Bank
# of India" beats "State Bank" and "South Indian Bank" beats "Indian Bank".
INSTITUTION_FRAGMENTS: Final[tuple[str, ...]] = (
    "HDFC",
    "ICICI",
    "State Bank of India",
    "State Bank",
    "SBI",
    "Axis",
    "Kotak",
    "Yes Bank",
    "IndusInd",
    "Punjab National Bank",
    "PNB",
    "Bank of Baroda",
    "Canara Bank",
    "Union Bank",
    "IDBI",
    "Central Bank",
    "South Indian Bank",
    "Indian Overseas Bank",
    "Indian Bank",
    "Bank of India",
    "Citibank",
    "American Express",
    "Amex",
    "Standard Chartered",
    "RBL",
    "AU Small Finance",
    "Federal Bank",
    "Bajaj Finance",
    "Tata Capital",
    "Mahindra Finance",
    "L&T Finance",
    "Fullerton India",
)

# Abbreviation -> canonical name. Checked in order, first hit wins.
BANK_NAME_MAPPINGS: Final[tuple[tuple[str, str], ...]] = (
    ("HDFC", "HDFC Bank"),
    ("ICICI", "ICICI Bank"),
    ("STATE BANK", "State Bank of India"),
    ("SBI", "State Bank of India"),
    ("AXIS", "Axis Bank"),
    ("KOTAK", "Kotak Mahindra Bank"),
    ("YES", "Yes Bank"),
    ("INDUSIND", "IndusInd Bank"),
    ("PUNJAB NATIONAL", "Punjab National Bank"),
    ("PNB", "Punjab National Bank"),
    ("BANK OF BARODA", "Bank of Baroda"),
    ("BOB", "Bank of Baroda"),
    ("CANARA", "Canara Bank"),
    ("UNION BANK", "Union Bank of India"),
    ("IDBI", "IDBI Bank"),
    ("CENTRAL BANK", "Central Bank of India"),
    ("SOUTH INDIAN", "South Indian Bank"),
    ("INDIAN OVERSEAS", "Indian Overseas Bank"),
    ("IOB", "Indian Overseas Bank"),
    ("INDIAN BANK", "Indian Bank"),
    ("BANK OF INDIA", "Bank of India"),
    ("BOI", "Bank of India"),
    ("CITIBANK", "Citibank"),
    ("CITI", "Citibank"),
    ("AMERICAN EXPRESS", "American Express"),
    ("AMEX", "American Express"),
    ("STANDARD CHARTERED", "Standard Chartered"),
    ("SC", "Standard Chartered"),
    ("RBL", "RBL Bank"),
    ("AU SMALL", "AU Small Finance Bank"),
    ("AU", "AU Small Finance Bank"),
    ("FEDERAL BANK", "Federal Bank"),
    ("BAJAJ", "Bajaj Finance"),
    ("TATA", "Tata Capital"),
    ("MAHINDRA", "Mahindra Finance"),
    ("L&T", "L&T Finance"),
    ("FULLERTON", "Fullerton India"),
)


def _fragment_pattern(fragment: str) -> re.Pattern:
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(fragment)}(?![A-Za-z0-9])", re.IGNORECASE)


_COMPILED_FRAGMENTS: Final[tuple[tuple[str, re.Pattern], ...]] = tuple(
    (fragment, _fragment_pattern(fragment)) for fragment in INSTITUTION_FRAGMENTS
)

# Keys match whole words only: "SC" must not hit "SCHEME" and "INDIAN BANK"
# must not hit "Indian Overseas Bank".
_COMPILED_MAPPINGS: Final[tuple[tuple[re.Pattern, str], ...]] = tuple(
    (_fragment_pattern(key), full_name) for key, full_name in BANK_NAME_MAPPINGS
)


def find_institution(text: str | None) -> str | None:
    """Return the leftmost known institution mention in ``text``.

    On a tie the longer fragment wins. The returned string is the text as
    it appears in the input, so callers usually pass it through
    :func:`normalize_bank_name`.
    """
    if not text:
        return None
    best: re.Match | None = None
    for _fragment, pattern in _COMPILED_FRAGMENTS:
        match = pattern.search(text)
        if match is None:
            continue
        if best is None or (match.start(), -len(match.group(0))) < (best.start(), -len(best.group(0))):
            best = match
    return best.group(0) if best else None


def contains_institution(text: str | None) -> bool:
    return find_institution(text) is not None


def normalize_bank_name(bank_name: str) -> str:
    """Map a raw lender name to its canonical form.

    Unknown names are returned unchanged (stripped).

    Example:
        >>> normalize_bank_name("hdfc")
        'HDFC Bank'
        >>> normalize_bank_name("HDFC BANK LTD")
        'HDFC Bank'
    """
    if not bank_name:
        return bank_name
    upper_name = bank_name.upper()
    for key, full_name in _COMPILED_MAPPINGS:
        if key.search(upper_name):
            return full_name
    return bank_name.strip()
