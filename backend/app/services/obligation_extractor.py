"""Sentence-level obligation detection."""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from app.models.obligation import ObligationOwner, ObligationStatus
from app.services import patterns

logger = logging.getLogger(__name__)

MAX_OBLIGATIONS = 10
OBLIGATION_TEXT_MAX_CHARS = 300
MIN_SENTENCE_CHARS = 30
FALLBACK_OBLIGATION = (
    "Review contract obligations - automated extraction did not find specific obligations."
)


@dataclass
class ObligationPayload:
    obligation: str
    owner: ObligationOwner
    due_date: date | None = None
    status: ObligationStatus = ObligationStatus.PENDING


def infer_owner(sentence: str) -> ObligationOwner:
    # Supplier wording wins when both parties are named.
    if patterns.SUPPLIER_PATTERN.search(sentence):
        return ObligationOwner.SUPPLIER
    if patterns.CLIENT_PATTERN.search(sentence):
        return ObligationOwner.CLIENT
    return ObligationOwner.BOTH


def is_obligation(sentence: str, phrases: Sequence[str] = patterns.OBLIGATION_PHRASES) -> bool:
    if len(sentence) <= MIN_SENTENCE_CHARS:
        return False
    lowered = sentence.lower()
    return any(phrase in lowered for phrase in phrases)


def extract_obligations(
    text: str,
    phrases: Sequence[str] = patterns.OBLIGATION_PHRASES,
    limit: int = MAX_OBLIGATIONS,
) -> list[ObligationPayload]:
    """
    Collect up to ``limit`` sentences containing an obligation phrase.

    Scanning stops once the limit is reached. If no sentence qualifies, one
    fallback obligation owned by both parties asks for manual review.
    """
    obligations: list[ObligationPayload] = []
    for sentence in patterns.SENTENCE_BOUNDARY.split(text):
        if len(obligations) >= limit:
            break
        if not is_obligation(sentence, phrases):
            continue
        obligations.append(
            ObligationPayload(
                obligation=sentence.strip()[:OBLIGATION_TEXT_MAX_CHARS],
                owner=infer_owner(sentence),
            )
        )

    if not obligations:
        logger.info("No obligation sentences found; emitting review placeholder")
        obligations.append(ObligationPayload(obligation=FALLBACK_OBLIGATION, owner=ObligationOwner.BOTH))
    return obligations
