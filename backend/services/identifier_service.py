"""
Identifier extraction for scam consolidation.

A report's identifier is the contact field matching its scam type: the phone
number for phone scams, the email address for email scams and the business
name for business scams. Reports sharing an identifier are grouped into one
consolidated scam.
"""

import re
from typing import Optional, Protocol

from models.config import settings
from repositories.db_models import ScamType

_WHITESPACE = re.compile(r"\s+")
_PHONE_NOISE = re.compile(r"[^\d+]")


class ReportIdentity(Protocol):
    """Anything shaped like a scam report (ORM row or submission)."""

    scam_type: ScamType | str
    scam_phone_number: Optional[str]
    scam_email: Optional[str]
    scam_business_name: Optional[str]


IDENTIFIER_FIELDS: dict[ScamType, str] = {
    ScamType.PHONE: "scam_phone_number",
    ScamType.EMAIL: "scam_email",
    ScamType.BUSINESS: "scam_business_name",
}


def identifier_field(scam_type: ScamType | str) -> str:
    """Name of the report attribute holding the identifier for a scam type."""
    return IDENTIFIER_FIELDS[ScamType(scam_type)]


def extract_identifier(report: ReportIdentity) -> Optional[str]:
    """
    Return the trimmed identifier for a report, or None if it has none.

    Only the field matching the report's scam type is considered; a phone
    scam with an email filled in still has no identifier.
    """
    try:
        field_name = identifier_field(report.scam_type)
    except ValueError:
        return None

    value = getattr(report, field_name, None)
    if value is None:
        return None

    trimmed = str(value).strip()
    return trimmed or None


def canonicalize_identifier(scam_type: ScamType | str, identifier: str) -> str:
    """
    Normalize an identifier so equivalent spellings group together.

    Phones keep digits and a leading `+` ("(555) 010-0100" becomes
    "5550100100"). Emails and business names are lower-cased with inner
    whitespace collapsed. Falls back to the input when normalization would
    leave nothing.
    """
    scam_type = ScamType(scam_type)

    if scam_type == ScamType.PHONE:
        leading_plus = identifier.startswith("+")
        digits = _PHONE_NOISE.sub("", identifier).replace("+", "")
        if not digits:
            return identifier
        return f"+{digits}" if leading_plus else digits

    return _WHITESPACE.sub(" ", identifier).strip().lower() or identifier


def consolidation_key(report: ReportIdentity) -> Optional[str]:
    """
    Identifier used to group a report.

    Exact trimmed match unless CONSOLIDATION_CANONICALIZE is switched on.
    """
    identifier = extract_identifier(report)
    if identifier is None:
        return None
    if settings.CONSOLIDATION_CANONICALIZE:
        return canonicalize_identifier(report.scam_type, identifier)
    return identifier
