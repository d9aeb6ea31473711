"""Keyword-triggered clause segmentation."""
import logging
from dataclasses import dataclass
from typing import Sequence

from app.services.patterns import CLAUSE_PATTERNS, ClausePattern

logger = logging.getLogger(__name__)

CLAUSE_EXCERPT_MAX_CHARS = 500
DEFAULT_INTERPRETATION = "Extracted from contract. Review for full context."
DEFAULT_RISK_NOTES = "Automated extraction - manual review recommended."
DEFAULT_PAGE_REF = "See document"

FALLBACK_NAME = "General Terms"
FALLBACK_CATEGORY = "General"
FALLBACK_INTERPRETATION = "Full text extraction. Consider manual clause identification."
FALLBACK_RISK_NOTES = "No structured clauses detected."


@dataclass
class ClausePayload:
    name: str
    category: str
    extracted_text: str
    interpretation: str
    risk_notes: str
    page_ref: str = DEFAULT_PAGE_REF


def segment_clauses(
    text: str, clause_patterns: Sequence[ClausePattern] = CLAUSE_PATTERNS
) -> list[ClausePayload]:
    """
    Emit one clause per pattern that matches, in pattern-table order.

    Only the first match of each pattern is used. When nothing matches, a
    single "General Terms" clause carrying the head of the text is returned.
    """
    clauses: list[ClausePayload] = []
    for pattern in clause_patterns:
        match = pattern.regex.search(text)
        if not match:
            continue
        clauses.append(
            ClausePayload(
                name=pattern.name,
                category=pattern.category,
                extracted_text=match.group(0)[:CLAUSE_EXCERPT_MAX_CHARS].strip(),
                interpretation=DEFAULT_INTERPRETATION,
                risk_notes=DEFAULT_RISK_NOTES,
            )
        )

    if not clauses:
        logger.info("No clause patterns matched; emitting fallback clause")
        clauses.append(
            ClausePayload(
                name=FALLBACK_NAME,
                category=FALLBACK_CATEGORY,
                extracted_text=text[:CLAUSE_EXCERPT_MAX_CHARS],
                interpretation=FALLBACK_INTERPRETATION,
                risk_notes=FALLBACK_RISK_NOTES,
            )
        )
    return clauses
