"""OCR package: text recognizers and per-line field matchers."""

from .matchers import match_date, match_line, match_name, match_number
from .recognizer import (
    PlainTextRecognizer,
    TesseractRecognizer,
    TextRecognizer,
    get_recognizer,
)
from .regexes import EXPIRY_DATE_PATTERN, iter_expiry_dates

__all__ = [
    "match_number",
    "match_name",
    "match_date",
    "match_line",
    "TextRecognizer",
    "PlainTextRecognizer",
    "TesseractRecognizer",
    "get_recognizer",
    "EXPIRY_DATE_PATTERN",
    "iter_expiry_dates",
]
