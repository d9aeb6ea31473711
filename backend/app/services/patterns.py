"""
Pattern tables used by the heuristic extraction scanners.

The tables are plain data so the scanners can be exercised against any
pattern set; pass a different table to the scanner functions to override.
"""
import re
from dataclasses import dataclass

# Field deriver
ISO_DATE_PATTERN = re.compile(r"\b(20\d{2})-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])\b")
LONG_DATE_PATTERN = re.compile(
    r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+(\d{1,2}),?\s+(20\d{2})\b",
    re.IGNORECASE,
)
MONTH_NUMBERS: dict[str, str] = {
    "jan": "01",
    "feb": "02",
    "mar": "03",
    "apr": "04",
    "may": "05",
    "jun": "06",
    "jul": "07",
    "aug": "08",
    "sep": "09",
    "oct": "10",
    "nov": "11",
    "dec": "12",
}
NET_TERMS_PATTERN = re.compile(r"\bNet\s*(\d+)\b", re.IGNORECASE)
PAYMENT_LABEL_PATTERN = re.compile(
    r"\bpayment\s+terms?\s*[:\-]?\s*([^\n.]+?)(?:\.|\Z)", re.IGNORECASE
)
NOTICE_PERIOD_PATTERN = re.compile(r"\b(\d+)\s*days?\s*(?:written\s+)?notice\b", re.IGNORECASE)
AUTO_RENEWAL_PATTERN = re.compile(r"\bauto[- ]?renew", re.IGNORECASE)


@dataclass(frozen=True)
class ClausePattern:
    """Section trigger: a keyword followed by 50-300 characters on the same line."""

    name: str
    category: str
    regex: re.Pattern[str]


def _section(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"{keyword}[:\s]+([^\n]{{50,300}})", re.IGNORECASE)


CLAUSE_PATTERNS: tuple[ClausePattern, ...] = (
    ClausePattern("Payment Terms", "Financial", _section(r"(?:payment\s+terms?|invoic(?:e|ing))")),
    ClausePattern("Term & Termination", "Duration", _section(r"(?:term(?:ination)?|duration)")),
    ClausePattern("Confidentiality", "Legal", _section(r"confidential(?:ity)?")),
    ClausePattern("Liability", "Legal", _section(r"(?:liability|limitation\s+of\s+damages)")),
    ClausePattern("Compliance", "Legal", _section(r"complian(?:ce)?")),
)

# Obligation extractor
SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+")
OBLIGATION_PHRASES: tuple[str, ...] = (
    "shall provide",
    "shall deliver",
    "shall submit",
    "shall maintain",
    "must provide",
    "must deliver",
    "agree to",
    "responsible for",
    "obligation to",
    "required to",
    "shall notify",
    "shall pay",
)
SUPPLIER_PATTERN = re.compile(r"\b(supplier|vendor|party\s+b)\b", re.IGNORECASE)
CLIENT_PATTERN = re.compile(r"\b(client|customer|party\s+a|buyer)\b", re.IGNORECASE)
