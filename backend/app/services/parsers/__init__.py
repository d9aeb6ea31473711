# Document text extractors

from .base_parser import BaseParser, ParseResult
from .pdf_parser import PdfParser

__all__ = [
    "BaseParser",
    "ParseResult",
    "PdfParser",
]
