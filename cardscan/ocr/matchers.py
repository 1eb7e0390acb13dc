"""Field matchers that classify a single OCR line.

Each matcher is a pure function: it looks at one line and returns a candidate
for its field or None. A None result only means the line is not of that kind.
"""

from datetime import date
from typing import Dict, Optional, Union

from ..core.constants import (
    CARD_NUMBER_MAX_LENGTH,
    CARD_NUMBER_MIN_LENGTH,
    HOLDER_DENY_WORDS,
    HOLDER_NAME_MAX_LENGTH,
    HOLDER_NAME_MIN_WORDS,
    START_DATE_WORDS,
)
from ..core.types import (
    CardNumberCandidate,
    ExpiryDateCandidate,
    FieldKind,
    HolderNameCandidate,
    ScanOptions,
)
from ..utils.validation import is_expired, is_valid_month, luhn_checksum, normalize_year
from .regexes import (
    NAME_TOKEN_PATTERN,
    contains_digits,
    contains_letters,
    extract_digits,
    iter_expiry_dates,
)

Candidate = Union[CardNumberCandidate, HolderNameCandidate, ExpiryDateCandidate]


def match_number(line: str, use_luhn: bool = True) -> Optional[CardNumberCandidate]:
    """
    Read a card number from a line such as "4539 1488 0343 6467".

    Lines carrying any letter are rejected outright; separators and stray
    punctuation are ignored. With use_luhn=False a well-formed length is
    enough, and the candidate still records whether the checksum passed.
    """
    if not line or contains_letters(line):
        return None

    digits = extract_digits(line)
    if not CARD_NUMBER_MIN_LENGTH <= len(digits) <= CARD_NUMBER_MAX_LENGTH:
        return None

    luhn_valid = luhn_checksum(digits)
    if use_luhn and not luhn_valid:
        return None

    return CardNumberCandidate(digits=digits, luhn_valid=luhn_valid, source=line)


def _name_key(token: str) -> str:
    return "".join(ch for ch in token if ch.isalpha()).upper()


def match_name(line: str) -> Optional[HolderNameCandidate]:
    """
    Read a cardholder name such as "John Smith" or "MARY-ANN O'NEIL".

    Needs at least two alphabetic words, no digits and none of the
    boilerplate words printed on cards (VALID THRU, VISA, DEBIT, months...).
    """
    if not line or contains_digits(line):
        return None

    tokens = line.split()
    if len(tokens) < HOLDER_NAME_MIN_WORDS:
        return None

    for token in tokens:
        if not NAME_TOKEN_PATTERN.match(token):
            return None
        if _name_key(token) in HOLDER_DENY_WORDS:
            return None

    name = " ".join(tokens).upper()
    if len(name) > HOLDER_NAME_MAX_LENGTH:
        return None

    return HolderNameCandidate(name=name, source=line)


def match_date(
    line: str,
    reject_expired: bool = False,
    today: Optional[date] = None,
) -> Optional[ExpiryDateCandidate]:
    """
    Read an expiry date written MM/YY, MM-YY, MM/YYYY or MM-YYYY.

    Cards often print a start date next to the expiry ("VALID FROM 01/20
    THRU 09/27"); the latest valid date on the line is returned. A date
    introduced by FROM, SINCE or MEMBER is a start date and never matches,
    even when it is alone on its line.
    """
    if not line:
        return None

    best: Optional[ExpiryDateCandidate] = None
    for month, year, four_digit, lead in iter_expiry_dates(line):
        if lead & START_DATE_WORDS:
            continue
        if not is_valid_month(month):
            continue
        year = normalize_year(year)
        if reject_expired and is_expired(month, year, today):
            continue
        candidate = ExpiryDateCandidate(
            month=month, year=year, four_digit_year=four_digit, source=line
        )
        if best is None or (year, month) > (best.year, best.month):
            best = candidate

    return best


def match_line(
    line: str,
    options: ScanOptions,
    today: Optional[date] = None,
) -> Dict[FieldKind, Candidate]:
    """Run every enabled matcher on a line and collect the hits."""
    matches: Dict[FieldKind, Candidate] = {}

    if options.check_card_number:
        number = match_number(line, use_luhn=options.use_luhn_validation)
        if number is not None:
            matches[FieldKind.NUMBER] = number

    if options.check_card_holder:
        name = match_name(line)
        if name is not None:
            matches[FieldKind.HOLDER] = name

    if options.check_card_expiry_date:
        expiry = match_date(line, reject_expired=options.reject_expired, today=today)
        if expiry is not None:
            matches[FieldKind.EXPIRY] = expiry

    return matches
