"""
PDF text extraction using pypdf.
Works on in-memory bytes; pages are joined with newlines.
"""
import logging
from io import BytesIO

from pypdf import PdfReader

from app.core.exceptions import UnparseableContentError

from .base_parser import BaseParser, ParseResult

logger = logging.getLogger(__name__)


class PdfParser(BaseParser):
    """Extract plain text and page count from a PDF buffer."""

    SUPPORTED_EXTENSIONS = {".pdf"}

    def parse_bytes(self, data: bytes) -> ParseResult:
        """
        Parse PDF bytes and return the full text.

        Args:
            data: Raw PDF content

        Returns:
            ParseResult with text and page_count

        Raises:
            UnparseableContentError: The buffer is not a readable, unencrypted PDF
        """
        try:
            reader = PdfReader(BytesIO(data))
            encrypted = reader.is_encrypted
        except Exception as e:
            raise UnparseableContentError(f"Could not open PDF: {e}") from e

        if encrypted:
            raise UnparseableContentError(
                "PDF is encrypted. Please provide an unencrypted version of the document."
            )

        text_parts = []
        try:
            for page in reader.pages:
                extracted = page.extract_text()
                if extracted:
                    text_parts.append(extracted)
            page_count = len(reader.pages)
        except Exception as e:
            raise UnparseableContentError(f"Failed to extract PDF text: {e}") from e

        result = ParseResult(text="\n".join(text_parts), page_count=page_count)
        if not result.text.strip():
            logger.warning("PDF parsed but no text layer was found (%d pages)", page_count)
        self._log_parse_complete(result)
        return result
