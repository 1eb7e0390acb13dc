"""Credit Card Scanner - Extract number, holder name and expiry date from noisy OCR text."""

__version__ = "1.0.0"
__author__ = "Credit Card Scanner Team"
__description__ = "Incremental classification of OCR lines into validated credit card fields"

from .core.types import (
    CardNumberCandidate,
    CreditCardModel,
    ExpiryDateCandidate,
    FieldKind,
    HolderNameCandidate,
    MergePolicy,
    ScanOptions,
    SessionState,
)
from .ocr.matchers import match_date, match_line, match_name, match_number
from .ocr.recognizer import PlainTextRecognizer, TesseractRecognizer, TextRecognizer, get_recognizer
from .scan.accumulator import CardAccumulator
from .scan.session import ScanSession
from .utils.config import settings

# Core functionality imports
from .utils.log import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__description__",
    # Core components
    "configure_logging",
    "get_logger",
    "settings",
    "FieldKind",
    "MergePolicy",
    "SessionState",
    "ScanOptions",
    "CardNumberCandidate",
    "HolderNameCandidate",
    "ExpiryDateCandidate",
    "CreditCardModel",
    "match_number",
    "match_name",
    "match_date",
    "match_line",
    "TextRecognizer",
    "PlainTextRecognizer",
    "TesseractRecognizer",
    "get_recognizer",
    "CardAccumulator",
    "ScanSession",
]
