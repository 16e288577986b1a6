"""Tests for identifier extraction and canonicalization."""

from types import SimpleNamespace

import pytest

from models.config import settings
from repositories.db_models import ScamType
from services.identifier_service import (
    canonicalize_identifier,
    consolidation_key,
    extract_identifier,
    identifier_field,
)


def _report(scam_type, phone=None, email=None, business=None):
    return SimpleNamespace(
        scam_type=scam_type,
        scam_phone_number=phone,
        scam_email=email,
        scam_business_name=business,
    )


class TestExtractIdentifier:
    """Tests for extract_identifier."""

    @pytest.mark.parametrize(
        "scam_type,expected_field",
        [
            (ScamType.PHONE, "scam_phone_number"),
            (ScamType.EMAIL, "scam_email"),
            (ScamType.BUSINESS, "scam_business_name"),
        ],
    )
    def test_field_per_type(self, scam_type, expected_field):
        assert identifier_field(scam_type) == expected_field
        assert identifier_field(scam_type.value) == expected_field

    def test_trims_whitespace(self):
        assert extract_identifier(_report(ScamType.PHONE, phone="  555-0100 ")) == "555-0100"

    def test_only_matching_field_counts(self):
        """A phone scam with only an email set has no identifier."""
        assert extract_identifier(_report(ScamType.PHONE, email="a@b.com")) is None

    def test_blank_is_none(self):
        assert extract_identifier(_report(ScamType.BUSINESS, business="   ")) is None

    def test_unknown_type_is_none(self):
        assert extract_identifier(_report("sms", phone="555-0100")) is None

    def test_malformed_email_still_extracted(self):
        """Validation belongs to submission; grouping uses the raw string."""
        assert extract_identifier(_report(ScamType.EMAIL, email="not-an-email")) == "not-an-email"


class TestCanonicalizeIdentifier:
    """Tests for canonicalize_identifier."""

    def test_phone_keeps_digits(self):
        assert canonicalize_identifier(ScamType.PHONE, "(555) 010-0100") == "5550100100"

    def test_phone_keeps_leading_plus(self):
        assert canonicalize_identifier(ScamType.PHONE, "+1 555.010.0100") == "+15550100100"

    def test_phone_without_digits_unchanged(self):
        assert canonicalize_identifier(ScamType.PHONE, "unknown") == "unknown"

    def test_email_lowercased(self):
        assert canonicalize_identifier(ScamType.EMAIL, " Fraud@Example.COM ") == "fraud@example.com"

    def test_business_whitespace_collapsed(self):
        assert canonicalize_identifier(ScamType.BUSINESS, "Acme   Refunds  Inc") == "acme refunds inc"


class TestConsolidationKey:
    """Grouping key with and without canonicalization."""

    def test_exact_by_default(self):
        assert consolidation_key(_report(ScamType.EMAIL, email="Fraud@Example.com")) == "Fraud@Example.com"

    def test_canonical_when_enabled(self, monkeypatch):
        monkeypatch.setattr(settings, "CONSOLIDATION_CANONICALIZE", True)
        assert consolidation_key(_report(ScamType.EMAIL, email="Fraud@Example.com")) == "fraud@example.com"

    def test_none_without_identifier(self):
        assert consolidation_key(_report(ScamType.PHONE)) is None
