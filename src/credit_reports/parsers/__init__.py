"""Credit report parsing engine.

Turns report text into structured accounts:
- ParserRegistry: picks a bureau strategy, falls back to GenericExtractor
- Bureau parsers: CIBIL, Experian, CRIF, Equifax
- PDFTextExtractor: PDF bytes -> text
"""

from credit_reports.parsers.extractor import PDFTextExtractor
from credit_reports.parsers.generic import GenericExtractor
from credit_reports.parsers.registry import ParserRegistry, build_default_registry

__all__ = [
    "GenericExtractor",
    "PDFTextExtractor",
    "ParserRegistry",
    "build_default_registry",
]
