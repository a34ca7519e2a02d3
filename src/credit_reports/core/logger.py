"""
Shared logging utilities.
"""

import logging
import re
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Patterns scrubbed from anything that may echo report text into logs.
PII_PATTERNS = [
    # Unmasked account/card numbers (9+ digits, optional separators)
    (re.compile(r"\b\d(?:[\s-]?\d){8,18}\b"), "[NUMBER]"),
    # PAN (5 letters, 4 digits, 1 letter)
    (re.compile(r"\b[A-Z]{5}\d{4}[A-Z]\b"), "[PAN]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
]


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)
    return filtered


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a console handler.

    Calling this more than once does not stack handlers.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers:
        if getattr(handler, "_credit_reports_console", False):
            handler.setLevel(log_level)
            return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler._credit_reports_console = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)
