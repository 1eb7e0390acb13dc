"""Regex patterns for credit card text extraction."""

import re
from typing import FrozenSet, Iterator, Tuple

# Month and year separated by "/" or "-", optional spaces around the separator.
# The four-digit alternative comes first so "09/2027" is not read as "09/20".
EXPIRY_DATE_PATTERN = re.compile(r'(?<!\d)(\d{1,2})\s*[/\-]\s*(\d{4}|\d{2})(?!\d)')

# One holder-name word: letters with optional inner ".", "-" or "'" joins and
# an optional trailing period (initials such as "J.").
NAME_TOKEN_PATTERN = re.compile(r"^[A-Za-z]+(?:[.\-'][A-Za-z]+)*\.?$")

NON_DIGIT_PATTERN = re.compile(r'\D')
ALPHA_PATTERN = re.compile(r'[A-Za-z]')
DIGIT_PATTERN = re.compile(r'\d')
WORD_PATTERN = re.compile(r"[A-Za-z]+")


def iter_expiry_dates(text: str) -> Iterator[Tuple[int, int, bool, FrozenSet[str]]]:
    """
    Find every month/year pair in text.

    Args:
        text: A single OCR line

    Yields:
        (month, year, four_digit_year, lead) in order of appearance, where lead
        holds the upper-cased words written between the previous date (or the
        start of the line) and this one. Months are not range-checked here.

    Examples:
        >>> [d[:3] for d in iter_expiry_dates("01-2020 12 / 2031")]
        [(1, 2020, True), (12, 2031, True)]
        >>> [sorted(d[3]) for d in iter_expiry_dates("VALID FROM 01/20 THRU 09/27")]
        [['FROM', 'VALID'], ['THRU']]
    """
    lead_start = 0
    for match in EXPIRY_DATE_PATTERN.finditer(text):
        lead = frozenset(word.upper() for word in WORD_PATTERN.findall(text[lead_start:match.start()]))
        lead_start = match.end()
        yield int(match.group(1)), int(match.group(2)), len(match.group(2)) == 4, lead


def extract_digits(text: str) -> str:
    """Drop everything that is not 0-9."""
    return NON_DIGIT_PATTERN.sub('', text)


def contains_letters(text: str) -> bool:
    return ALPHA_PATTERN.search(text) is not None


def contains_digits(text: str) -> bool:
    return DIGIT_PATTERN.search(text) is not None
