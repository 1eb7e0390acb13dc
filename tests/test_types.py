"""Tests for the card model and option types."""

import pytest

from cardscan.core.types import (
    CardNumberCandidate,
    CreditCardModel,
    ExpiryDateCandidate,
    FieldKind,
    HolderNameCandidate,
    MergePolicy,
    ScanOptions,
)


class TestCandidates:
    """Test candidate equality and ranking."""

    def test_equality_ignores_source_text(self):
        assert HolderNameCandidate("JOHN SMITH", source="John Smith") == HolderNameCandidate("JOHN SMITH")
        assert CardNumberCandidate("4539148803436467", True, source="a") == \
            CardNumberCandidate("4539148803436467", True, source="b")

    def test_expiry_equality_ignores_year_width(self):
        assert ExpiryDateCandidate(9, 2027, four_digit_year=True) == ExpiryDateCandidate(9, 2027)

    def test_scores(self):
        assert CardNumberCandidate("4539148803436467", True).score == 1
        assert CardNumberCandidate("4539148803436468", False).score == 0
        assert ExpiryDateCandidate(9, 2027, four_digit_year=True).score == 1
        assert ExpiryDateCandidate(9, 2027).score == 0
        assert HolderNameCandidate("JOHN SMITH").score == 0

    def test_values(self):
        assert CardNumberCandidate("4539148803436467", True).value == "4539148803436467"
        assert HolderNameCandidate("JOHN SMITH").value == "JOHN SMITH"
        assert ExpiryDateCandidate(1, 2030).value == "01/30"


class TestCreditCardModel:
    """Test the emitted card."""

    @pytest.fixture
    def model(self):
        return CreditCardModel(
            number="4539148803436467",
            holder="JOHN SMITH",
            expiry=ExpiryDateCandidate(month=9, year=2027),
        )

    @pytest.mark.parametrize("number, brand", [
        ("378282246310005", "American Express"),
        ("4539148803436467", "Visa"),
        ("5555555555554444", "MasterCard"),
        ("6011111111111117", "Discover"),
        ("1234567890123", None),
    ])
    def test_brand(self, number, brand):
        assert CreditCardModel(number=number).brand == brand

    def test_masked_number(self, model):
        assert model.masked_number == "**** **** **** 6467"
        assert CreditCardModel(number="378282246310005").masked_number == "**** **** ***0 005"

    def test_str_never_shows_full_number(self, model):
        text = str(model)
        assert "4539148803436467" not in text
        assert "6467" in text
        assert "09/27" in text

    def test_to_dict(self, model):
        assert model.to_dict() == {
            "number": "4539148803436467",
            "holder": "JOHN SMITH",
            "expiry": "09/27",
            "expiry_month": 9,
            "expiry_year": 2027,
            "brand": "Visa",
        }

    def test_partial_model(self):
        model = CreditCardModel(holder="JOHN SMITH")
        assert model.brand is None
        assert model.masked_number is None
        assert model.to_dict()["expiry"] is None


class TestScanOptions:
    """Test option helpers."""

    def test_enabled_fields(self):
        assert ScanOptions().enabled_fields() == [FieldKind.NUMBER, FieldKind.HOLDER, FieldKind.EXPIRY]
        assert ScanOptions(check_card_number=False).enabled_fields() == [FieldKind.HOLDER, FieldKind.EXPIRY]

    def test_merge_policy_values(self):
        assert MergePolicy("keep_first") is MergePolicy.KEEP_FIRST
        assert MergePolicy("keep_latest") is MergePolicy.KEEP_LATEST
