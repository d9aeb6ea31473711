"""Base parser interface."""
from abc import ABC, abstractmethod
from typing import Set
import logging

logger = logging.getLogger(__name__)


class ParseResult:
    """Result from parsing a document."""

    def __init__(self, text: str, page_count: int = 0):
        self.text = text
        self.page_count = page_count
        self.word_count = len(text.split())


class BaseParser(ABC):
    """Base class for document parsers working on in-memory bytes."""

    SUPPORTED_EXTENSIONS: Set[str] = set()

    def can_parse(self, file_name: str) -> bool:
        """Check if this parser can handle the file."""
        return any(file_name.lower().endswith(ext) for ext in self.SUPPORTED_EXTENSIONS)

    @abstractmethod
    def parse_bytes(self, data: bytes) -> ParseResult:
        """Parse the document bytes and extract text."""
        pass

    def _log_parse_complete(self, result: ParseResult):
        """Log parsing completion."""
        logger.info(
            f"Completed parse with {self.__class__.__name__}: "
            f"{result.word_count} words, {result.page_count} pages"
        )
