"""Tests for card field validation helpers."""

from datetime import date

import pytest

from cardscan.utils.error_handler import ConfigurationError
from cardscan.utils.validation import (
    is_expired,
    is_valid_month,
    luhn_checksum,
    normalize_year,
    validate_numeric_range,
)


class TestLuhnChecksum:
    """Test the mod-10 checksum."""

    @pytest.mark.parametrize("digits", [
        "4539148803436467",
        "4111111111111111",
        "5555555555554444",
        "378282246310005",
        "6011111111111117",
        "4222222222222",
        "6304000000000000",
        "0",
    ])
    def test_valid_numbers(self, digits):
        assert luhn_checksum(digits)

    @pytest.mark.parametrize("digits", [
        "4539148803436468",
        "4111111111111112",
        "1234567812345678",
        "378282246310006",
    ])
    def test_invalid_numbers(self, digits):
        assert not luhn_checksum(digits)

    def test_single_digit_change_breaks_checksum(self):
        """Any one-digit change of a valid number must fail."""
        valid = "4539148803436467"
        for position in range(len(valid)):
            original = int(valid[position])
            for replacement in range(10):
                if replacement == original:
                    continue
                mutated = valid[:position] + str(replacement) + valid[position + 1:]
                assert not luhn_checksum(mutated), mutated

    def test_rejects_non_digit_input(self):
        assert not luhn_checksum("")
        assert not luhn_checksum("4539 1488 0343 6467")
        assert not luhn_checksum("abcd")


class TestMonthAndYear:
    """Test month range and year normalization."""

    def test_month_range(self):
        assert all(is_valid_month(m) for m in range(1, 13))
        assert not is_valid_month(0)
        assert not is_valid_month(13)
        assert not is_valid_month(99)

    def test_two_digit_years_use_2000s(self):
        assert normalize_year(27) == 2027
        assert normalize_year(0) == 2000
        assert normalize_year(99) == 2099

    def test_four_digit_years_unchanged(self):
        assert normalize_year(2031) == 2031
        assert normalize_year(1999) == 1999


class TestIsExpired:
    """Test expiry relative to a given day."""

    def test_current_month_is_not_expired(self):
        assert not is_expired(10, 2026, today=date(2026, 10, 31))

    def test_previous_month_is_expired(self):
        assert is_expired(9, 2026, today=date(2026, 10, 1))

    def test_future_dates(self):
        assert not is_expired(1, 27, today=date(2026, 10, 18))
        assert not is_expired(9, 2030, today=date(2026, 10, 18))

    def test_two_digit_year_in_past(self):
        assert is_expired(12, 25, today=date(2026, 10, 18))


class TestValidateNumericRange:
    """Test numeric range validation used by configuration."""

    def test_value_in_range(self):
        assert validate_numeric_range(5, min_value=0, max_value=10) == 5

    def test_below_minimum(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_numeric_range(-1, min_value=0, field_name="delay_ms")
        assert "delay_ms -1 is below minimum 0" in str(exc_info.value)
        assert exc_info.value.details["field_name"] == "delay_ms"

    def test_above_maximum(self):
        with pytest.raises(ConfigurationError):
            validate_numeric_range(11, max_value=10)

    def test_no_bounds(self):
        assert validate_numeric_range(-1000) == -1000
