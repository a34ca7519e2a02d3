"""Parser registry for routing report text to a bureau strategy.

This module orchestrates the parsing workflow:
1. Ask each registered bureau parser, in order, whether it recognizes the text
2. Run the first one that does (falling through to the next on failure)
3. Fill in accounts with the generic extractor when the strategy found none
4. Use the generic extractor for the whole report when no strategy succeeded

``parse_report`` never raises; problems end up in ``summary.errors``.
"""

import logging

from credit_reports.config import Settings, get_settings
from credit_reports.parsers.assembler import assemble_result
from credit_reports.parsers.bureaus import (
    BureauParser,
    CIBILParser,
    CRIFParser,
    EquifaxParser,
    ExperianParser,
)
from credit_reports.parsers.generic import GenericExtractor
from credit_reports.schemas.internal import BureauKind, ParseResult

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Ordered collection of bureau parsers plus the generic fallback.

    Parsers are consulted in registration order and the first whose
    ``can_parse`` accepts the text wins. Build the registry once and share
    it; it holds no per-call state.

    Example:
        >>> registry = build_default_registry()
        >>> result = registry.parse_report(report_text)
        >>> print(f"Bureau: {result.bureau}, accounts: {len(result.accounts)}")
    """

    def __init__(
        self,
        parsers: list[BureauParser] | None = None,
        fallback: GenericExtractor | None = None,
    ):
        """Initialize the registry.

        Args:
            parsers: Bureau parsers in priority order
            fallback: Generic extractor (default: new GenericExtractor)
        """
        self.fallback = fallback or GenericExtractor()
        self._parsers: list[BureauParser] = []
        for parser in parsers or []:
            self.register_parser(parser)

    def register_parser(self, parser: BureauParser) -> None:
        """Append a bureau parser; it is tried after those already registered.

        Raises:
            TypeError: If ``parser`` does not implement the BureauParser protocol
        """
        if not isinstance(parser, BureauParser):
            raise TypeError(f"Parser must implement BureauParser, got {type(parser).__name__}")
        self._parsers.append(parser)

    def registered_bureaus(self) -> list[BureauKind]:
        return [parser.bureau for parser in self._parsers]

    def get_parser(self, bureau: BureauKind) -> BureauParser | None:
        for parser in self._parsers:
            if parser.bureau == bureau:
                return parser
        return None

    def detect_bureau(self, text: str) -> BureauKind | None:
        """Bureau of the first parser that recognizes ``text``, else None."""
        for parser in self._parsers:
            if parser.can_parse(text or ""):
                return parser.bureau
        return None

    def parse_report(self, text: str) -> ParseResult:
        """Parse report text into a ParseResult. Never raises.

        Args:
            text: Plain text of the whole report

        Returns:
            ParseResult from the first successful bureau parser, or from the
            generic extractor when none matched or all matched ones failed
        """
        text = text or ""
        errors: list[str] = []
        detected: BureauKind | None = None

        try:
            for parser in self._parsers:
                if not parser.can_parse(text):
                    continue
                detected = detected or parser.bureau

                try:
                    result = parser.parse_report(text)
                except Exception as e:
                    logger.warning("%s parser failed: %s", parser.bureau.value, e, exc_info=True)
                    errors.append(f"{parser.bureau.value} parser failed: {e}")
                    continue

                accounts = result.accounts
                if not accounts:
                    logger.info(
                        "%s parser found no accounts, using generic extractor",
                        parser.bureau.value,
                    )
                    accounts = self.fallback.extract_accounts(text)

                summary = result.summary.model_copy(
                    update={"errors": errors + result.summary.errors}
                )
                logger.info("Parsed %s report: %d accounts", result.bureau.value, len(accounts))
                return assemble_result(result.bureau, summary, accounts)

        except Exception as e:
            logger.exception("Report orchestration failed")
            errors.append(f"Report parsing failed: {e}")

        bureau = detected or BureauKind.UNKNOWN
        logger.info("Using generic extractor for report (bureau: %s)", bureau.value)
        return self.fallback.parse_report(text, errors=errors, bureau=bureau)


def build_default_registry(settings: Settings | None = None) -> ParserRegistry:
    """Build the registry with every bundled bureau parser.

    Order matters: Experian, CIBIL, CRIF, Equifax. A report mentioning
    several bureaus is handled by the first of these it matches.
    """
    settings = settings or get_settings()
    return ParserRegistry(
        parsers=[
            ExperianParser(include_inactive=settings.experian_include_inactive_rows),
            CIBILParser(),
            CRIFParser(),
            EquifaxParser(),
        ]
    )
