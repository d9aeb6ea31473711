"""Best-effort structured fields derived from contract text."""
import logging

from app.schemas.extraction import DerivedFields
from app.services import patterns

logger = logging.getLogger(__name__)

AUTO_RENEWAL_TERMS = "Auto-renewal unless terminated with notice"
PAYMENT_LABEL_MAX_CHARS = 50


def find_dates(text: str) -> list[str]:
    """Return every ISO and long-form date in ``text`` as sorted ISO strings."""
    dates = [f"{year}-{month}-{day}" for year, month, day in patterns.ISO_DATE_PATTERN.findall(text)]
    for match in patterns.LONG_DATE_PATTERN.finditer(text):
        month = patterns.MONTH_NUMBERS.get(match.group(0)[:3].lower(), "01")
        day = match.group(1).zfill(2)
        dates.append(f"{match.group(2)}-{month}-{day}")
    dates.sort()
    return dates


def find_payment_terms(text: str) -> str | None:
    net_match = patterns.NET_TERMS_PATTERN.search(text)
    if net_match:
        return f"Net {net_match.group(1)}"
    label_match = patterns.PAYMENT_LABEL_PATTERN.search(text)
    if label_match:
        return label_match.group(1).strip()[:PAYMENT_LABEL_MAX_CHARS]
    return None


def find_notice_days(text: str) -> int | None:
    match = patterns.NOTICE_PERIOD_PATTERN.search(text)
    return int(match.group(1)) if match else None


def derive_fields(text: str) -> DerivedFields:
    """
    Scan text for dates, payment terms, notice periods and renewal language.

    Each field is detected independently; a field with no matching pattern
    is left as ``None``.

    Args:
        text: Plain contract text.

    Returns:
        DerivedFields with whatever could be detected.
    """
    fields = DerivedFields()

    dates = find_dates(text)
    if len(dates) >= 2:
        fields.effective_date = dates[0]
        fields.expiry_date = dates[-1]
    elif dates:
        fields.effective_date = dates[0]

    fields.payment_terms = find_payment_terms(text)
    fields.termination_notice_days = find_notice_days(text)
    if patterns.AUTO_RENEWAL_PATTERN.search(text):
        fields.renewal_terms = AUTO_RENEWAL_TERMS

    logger.debug(
        "Derived fields: %d dates, payment=%s, notice=%s",
        len(dates),
        fields.payment_terms,
        fields.termination_notice_days,
    )
    return fields
