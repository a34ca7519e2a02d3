"""Split whole-report text into account-sized chunks.

Bureau layouts drift, so splitting is done with an ordered list of
delimiter strategies: section headers first, then lender labels, then
explicit account-number labels. The first strategy that produces enough
chunks wins.
"""

import logging
import re
from collections.abc import Sequence

logger = logging.getLogger(__name__)

MIN_SECTIONS = 3

LENDER_LABEL_DELIMITER = re.compile(
    r"\b(?:member\s+name|lender(?:\s+name)?|bank\s+name)\s{0,3}:", re.IGNORECASE
)
ACCOUNT_NUMBER_DELIMITER = re.compile(
    r"\b(?:account\s+number|a/c\s+no\.?)\s{0,3}[:\s]\s{0,3}[X*\d]", re.IGNORECASE
)


def section_strategies(*header_patterns: str) -> tuple[re.Pattern, ...]:
    """Build the ordered strategy list for a bureau.

    Args:
        *header_patterns: Bureau-specific section header alternatives,
            joined into the primary delimiter

    Returns:
        (primary header delimiter, lender label, account-number label)
    """
    primary = re.compile(r"(?:" + "|".join(header_patterns) + r")", re.IGNORECASE)
    return (primary, LENDER_LABEL_DELIMITER, ACCOUNT_NUMBER_DELIMITER)


def split_on(text: str, delimiter: re.Pattern) -> list[str]:
    """Cut ``text`` before every delimiter match.

    Unlike ``re.split`` the delimiter text stays at the head of its chunk,
    so a chunk keeps its own header and labels. Text before the first match
    is returned as the first chunk.
    """
    starts = [match.start() for match in delimiter.finditer(text)]
    if not starts:
        return [text]

    bounds = [0] + [s for s in starts if s > 0] + [len(text)]
    return [text[begin:end] for begin, end in zip(bounds, bounds[1:])]


def split_into_sections(
    text: str,
    strategies: Sequence[re.Pattern],
    min_length: int = 50,
    min_sections: int = MIN_SECTIONS,
) -> list[str]:
    """Split report text into candidate account sections.

    Args:
        text: Full report text
        strategies: Ordered delimiter patterns (see :func:`section_strategies`)
        min_length: Chunks shorter than this (after stripping) are noise
        min_sections: A strategy must yield at least this many raw chunks
            to be accepted; otherwise the next one is tried

    Returns:
        Chunks from the first accepted strategy (or the last strategy tried),
        with noise chunks removed
    """
    if not text or not text.strip():
        return []

    chunks: list[str] = [text]
    for index, delimiter in enumerate(strategies):
        chunks = split_on(text, delimiter)
        if len(chunks) >= min_sections:
            logger.debug("Section strategy %d produced %d chunks", index + 1, len(chunks))
            break

    return [chunk for chunk in chunks if len(chunk.strip()) >= min_length]
