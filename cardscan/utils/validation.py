"""
Validation helpers for card fields and scanner configuration.

Card checks (Luhn checksum, month range, expiry) are pure functions with no
state; the matchers and the accumulator call them on every candidate.
"""

from datetime import date
from typing import Optional, Union

from ..core.constants import YEAR_OFFSET
from .error_handler import ConfigurationError


def luhn_checksum(digits: str) -> bool:
    """
    Check a digit string against the Luhn (mod 10) algorithm.

    Every second digit counting from the rightmost one is doubled, nines are
    cast out, and the total must be divisible by ten.

    Args:
        digits: String made only of the characters 0-9

    Returns:
        True if the checksum passes, False otherwise (including empty or
        non-digit input)

    Examples:
        >>> luhn_checksum("4539148803436467")
        True
        >>> luhn_checksum("4539148803436468")
        False
    """
    if not digits or not digits.isdigit():
        return False

    total = 0
    parity = len(digits) % 2
    for index, char in enumerate(digits):
        value = int(char)
        if index % 2 == parity:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return total % 10 == 0


def is_valid_month(month: int) -> bool:
    """Return True if month is a calendar month number (1-12)."""
    return 1 <= month <= 12


def normalize_year(year: int) -> int:
    """Expand a two-digit year into the 2000s; four-digit years pass through."""
    if year < 100:
        return YEAR_OFFSET + year
    return year


def is_expired(month: int, year: int, today: Optional[date] = None) -> bool:
    """
    Check whether an expiry date lies in the past.

    Cards stay valid through the last day of the printed month, so a card
    expiring 09/2027 is still valid on 2027-09-30.
    """
    today = today or date.today()
    return (normalize_year(year), month) < (today.year, today.month)


def validate_numeric_range(
    value: Union[int, float],
    min_value: Optional[Union[int, float]] = None,
    max_value: Optional[Union[int, float]] = None,
    field_name: str = "value",
) -> Union[int, float]:
    """Return value, or raise ConfigurationError if it falls outside [min_value, max_value]."""
    if min_value is not None and value < min_value:
        problem = f"below minimum {min_value}"
    elif max_value is not None and value > max_value:
        problem = f"above maximum {max_value}"
    else:
        return value

    raise ConfigurationError(
        f"{field_name} {value} is {problem}",
        details={"field_name": field_name, "value": value,
                 "min_value": min_value, "max_value": max_value},
    )
