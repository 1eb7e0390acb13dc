from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any

from .constants import CARD_BRANDS


class FieldKind(str, Enum):
    NUMBER = "number"
    HOLDER = "holder"
    EXPIRY = "expiry"


class MergePolicy(str, Enum):
    """How a stored field reacts to a different, valid candidate."""
    KEEP_FIRST = "keep_first"
    KEEP_LATEST = "keep_latest"


class SessionState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    COMPLETE = "complete"


@dataclass(frozen=True)
class CardNumberCandidate:
    digits: str
    luhn_valid: bool
    source: str = field(default="", compare=False)

    @property
    def value(self) -> str:
        return self.digits

    @property
    def score(self) -> int:
        return 1 if self.luhn_valid else 0


@dataclass(frozen=True)
class HolderNameCandidate:
    name: str
    source: str = field(default="", compare=False)

    @property
    def value(self) -> str:
        return self.name

    @property
    def score(self) -> int:
        return 0


@dataclass(frozen=True)
class ExpiryDateCandidate:
    month: int
    year: int
    four_digit_year: bool = field(default=False, compare=False)
    source: str = field(default="", compare=False)

    @property
    def value(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        """MM/YY as printed on most cards."""
        return f"{self.month:02d}/{self.year % 100:02d}"

    @property
    def score(self) -> int:
        return 1 if self.four_digit_year else 0


@dataclass(frozen=True)
class CreditCardModel:
    """A completed scan; fields that were not requested stay None."""

    number: Optional[str] = None
    holder: Optional[str] = None
    expiry: Optional[ExpiryDateCandidate] = None

    @property
    def brand(self) -> Optional[str]:
        if not self.number:
            return None
        return CARD_BRANDS.get(self.number[0])

    @property
    def masked_number(self) -> Optional[str]:
        if not self.number:
            return None
        if len(self.number) <= 4:
            return self.number
        masked = "*" * (len(self.number) - 4) + self.number[-4:]
        return " ".join(masked[i:i + 4] for i in range(0, len(masked), 4))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "holder": self.holder,
            "expiry": self.expiry.label if self.expiry else None,
            "expiry_month": self.expiry.month if self.expiry else None,
            "expiry_year": self.expiry.year if self.expiry else None,
            "brand": self.brand,
        }

    def __str__(self) -> str:
        expiry = self.expiry.label if self.expiry else None
        return f"CreditCardModel(number={self.masked_number}, holder={self.holder}, expiry={expiry})"


@dataclass
class ScanOptions:
    check_card_number: bool = True
    check_card_holder: bool = True
    check_card_expiry_date: bool = True
    use_luhn_validation: bool = True
    reject_expired: bool = False
    debug: bool = False
    delay_ms: int = 0
    merge_policy: MergePolicy = MergePolicy.KEEP_FIRST

    def enabled_fields(self) -> List[FieldKind]:
        enabled = []
        if self.check_card_number:
            enabled.append(FieldKind.NUMBER)
        if self.check_card_holder:
            enabled.append(FieldKind.HOLDER)
        if self.check_card_expiry_date:
            enabled.append(FieldKind.EXPIRY)
        return enabled

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "ScanOptions":
        options = cls(
            check_card_number=settings.CHECK_CARD_NUMBER,
            check_card_holder=settings.CHECK_CARD_HOLDER,
            check_card_expiry_date=settings.CHECK_CARD_EXPIRY_DATE,
            use_luhn_validation=settings.USE_LUHN_VALIDATION,
            reject_expired=settings.REJECT_EXPIRED,
            debug=settings.DEBUG,
            delay_ms=settings.NEXT_FRAME_DELAY_MS,
            merge_policy=MergePolicy(settings.MERGE_POLICY),
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(options, key, value)
        return options


@dataclass
class SessionStats:
    frames_processed: int = 0
    frames_dropped: int = 0
    lines_seen: int = 0
    cards_emitted: int = 0
    recognition_failures: int = 0
