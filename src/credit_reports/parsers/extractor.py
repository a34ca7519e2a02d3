"""PDF text extraction wrapper using pypdf.

Bureau reports are delivered as (usually encrypted) PDFs. This module
turns them into the plain text the parsers work on and maps the possible
failures onto catalog error codes.
"""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from credit_reports.core.exceptions import PDFExtractionError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """Extract page text from report PDFs, decrypting when needed.

    Example:
        >>> extractor = PDFTextExtractor()
        >>> text = extractor.extract_text(pdf_bytes, password="ABCDE1234F")
    """

    def extract_text(self, pdf_bytes: bytes, password: str | None = None) -> str:
        """Decode a PDF into text, one page per block.

        Args:
            pdf_bytes: PDF file content as bytes
            password: Optional password for encrypted PDFs

        Returns:
            Page texts joined by blank lines (may be empty for image-only PDFs)

        Raises:
            PDFExtractionError: PDF_002 when a password is needed but missing,
                PDF_003 when the password is wrong, PDF_001 for anything else
        """
        if not pdf_bytes:
            raise PDFExtractionError("PDF_001", details={"reason": "empty file"}, http_status=400)

        normalized_password = password.strip() if isinstance(password, str) else None

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
        except (PdfReadError, ValueError, OSError) as e:
            logger.warning("Could not open PDF: %s", e)
            raise PDFExtractionError("PDF_001", details={"reason": str(e)}, http_status=400) from e

        if reader.is_encrypted:
            # Some reports are encrypted with an empty user password.
            if not reader.decrypt(normalized_password or ""):
                if not normalized_password:
                    raise PDFExtractionError("PDF_002", http_status=400)
                raise PDFExtractionError("PDF_003", http_status=400)

        try:
            texts = [(page.extract_text() or "") for page in reader.pages]
        except Exception as e:
            logger.warning("PDF text extraction failed: %s", e)
            raise PDFExtractionError("PDF_001", details={"reason": str(e)}, http_status=400) from e

        logger.info("Extracted text from %d PDF pages", len(texts))
        return "\n\n".join(text for text in texts if text.strip())
