"""Best-known value per card field across many OCR frames."""

from typing import Dict, List, Optional

from ..core.types import (
    CreditCardModel,
    FieldKind,
    MergePolicy,
    ScanOptions,
)
from ..ocr.matchers import Candidate
from ..utils.error_handler import IncompleteCardError
from ..utils.log import LoggerMixin


class CardAccumulator(LoggerMixin):
    """
    Holds one slot per field kind for the length of a scanning session.

    Frames of the same card produce overlapping, noisy readings. Storing the
    best value seen so far for each field lets a card complete even when no
    single frame shows every field.
    """

    def __init__(self, policy: MergePolicy = MergePolicy.KEEP_FIRST):
        self.policy = MergePolicy(policy)
        self._slots: Dict[FieldKind, Candidate] = {}

    def offer(self, kind: FieldKind, candidate: Optional[Candidate]) -> bool:
        """
        Offer a validated candidate for a field.

        Returns:
            True if the stored value changed
        """
        if candidate is None:
            return False

        current = self._slots.get(kind)
        if current is not None:
            if current == candidate:
                return False
            if self.policy is MergePolicy.KEEP_FIRST and candidate.score <= current.score:
                return False
            if self.policy is MergePolicy.KEEP_LATEST and candidate.score < current.score:
                return False
            self.logger.debug(
                "Field replaced",
                field=kind.value,
                policy=self.policy.value,
                old_score=current.score,
                new_score=candidate.score,
            )

        self._slots[kind] = candidate
        return True

    def get(self, kind: FieldKind) -> Optional[Candidate]:
        return self._slots.get(kind)

    def filled_fields(self) -> List[FieldKind]:
        return [kind for kind in FieldKind if kind in self._slots]

    def is_complete(self, options: ScanOptions) -> bool:
        enabled = options.enabled_fields()
        return bool(enabled) and all(kind in self._slots for kind in enabled)

    def snapshot(self, options: ScanOptions) -> CreditCardModel:
        """Assemble a model from enabled fields; state is left untouched."""
        if not self.is_complete(options):
            missing = [
                kind.value for kind in options.enabled_fields() if kind not in self._slots
            ]
            raise IncompleteCardError(
                "Card is not complete", details={"missing_fields": missing}
            )

        number = self._slots.get(FieldKind.NUMBER) if options.check_card_number else None
        holder = self._slots.get(FieldKind.HOLDER) if options.check_card_holder else None
        expiry = self._slots.get(FieldKind.EXPIRY) if options.check_card_expiry_date else None

        return CreditCardModel(
            number=number.digits if number else None,
            holder=holder.name if holder else None,
            expiry=expiry,
        )

    def reset(self):
        self._slots.clear()

    def __len__(self) -> int:
        return len(self._slots)
