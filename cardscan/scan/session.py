"""Scan session controller: frames in, at most one card out per completion."""

import asyncio
import threading
from datetime import date
from typing import Any, Callable, Iterable, Optional

from ..core.types import (
    CreditCardModel,
    ScanOptions,
    SessionState,
    SessionStats,
)
from ..ocr.matchers import match_line
from ..ocr.recognizer import PlainTextRecognizer, TextRecognizer
from ..utils.error_handler import (
    ConfigurationError,
    ErrorContext,
    RecognitionError,
    handle_error,
)
from ..utils.log import LoggerMixin
from ..utils.validation import validate_numeric_range
from .accumulator import CardAccumulator

ScanCallback = Callable[[CreditCardModel], Any]


class ScanSession(LoggerMixin):
    """
    Runs one classification pass per frame and emits completed cards.

    Frames that arrive while a pass is running are dropped rather than
    queued. The busy guard is held from before recognition until after the
    optional cooldown, and released on every path.
    """

    def __init__(
        self,
        options: Optional[ScanOptions] = None,
        recognizer: Optional[TextRecognizer] = None,
        on_scan: Optional[ScanCallback] = None,
        today: Optional[date] = None,
    ):
        self.options = options or ScanOptions()
        if not self.options.enabled_fields():
            raise ConfigurationError(
                "At least one card field must be enabled",
                details={"options": self.options},
            )
        validate_numeric_range(self.options.delay_ms, min_value=0, field_name="delay_ms")

        self.recognizer = recognizer or PlainTextRecognizer()
        self.on_scan = on_scan
        self.today = today
        self.accumulator = CardAccumulator(self.options.merge_policy)
        self.stats = SessionStats()
        self._state = SessionState.IDLE
        self._busy = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def process_lines(
        self, lines: Iterable[str], frame_id: Any = None
    ) -> Optional[CreditCardModel]:
        """
        Classify one batch of recognized lines.

        Returns:
            The completed card if this batch completed it, otherwise None
        """
        self._state = SessionState.SCANNING
        self.stats.frames_processed += 1

        for line in lines:
            self.stats.lines_seen += 1
            if self.options.debug:
                self.logger.info("Recognized line", frame_id=frame_id, text=line)

            for kind, candidate in match_line(line, self.options, self.today).items():
                changed = self.accumulator.offer(kind, candidate)
                if self.options.debug:
                    self.logger.info(
                        "Line matched",
                        frame_id=frame_id,
                        field=kind.value,
                        stored=changed,
                    )

        if not self.accumulator.is_complete(self.options):
            return None

        model = self.accumulator.snapshot(self.options)
        self.accumulator.reset()
        self._state = SessionState.COMPLETE
        self.stats.cards_emitted += 1

        if self.options.debug:
            self.logger.info("Scanned card", frame_id=frame_id, card=str(model))
        else:
            self.logger.info("Card scanned", frame_id=frame_id, brand=model.brand)

        if self.on_scan is not None:
            self.on_scan(model)
        return model

    async def submit_frame(
        self, frame: Any, frame_id: Any = None
    ) -> Optional[CreditCardModel]:
        """
        Recognize a frame and classify its lines, unless a pass is running.

        Raises:
            RecognitionError: Only when options.debug is set
        """
        if not self._busy.acquire(blocking=False):
            self.stats.frames_dropped += 1
            self.logger.debug("Frame dropped, pass in flight", frame_id=frame_id)
            return None

        try:
            try:
                lines = await asyncio.to_thread(self.recognizer.recognize, frame)
            except Exception as e:
                self.stats.recognition_failures += 1
                error = e if isinstance(e, RecognitionError) else RecognitionError(
                    "Text recognition failed",
                    details={"error": str(e), "error_type": type(e).__name__},
                )
                context = ErrorContext(
                    operation="recognize",
                    module=__name__,
                    function="submit_frame",
                    input_data={"frame_id": frame_id, "engine": self.recognizer.name},
                )
                lines = handle_error(
                    error, context, self.logger,
                    reraise=self.options.debug, default_return=[],
                )

            return self.process_lines(lines, frame_id=frame_id)
        finally:
            if self.options.delay_ms:
                await asyncio.sleep(self.options.delay_ms / 1000)
            self._busy.release()

    def reset(self):
        """Forget everything gathered so far and wait for the next frame."""
        self.accumulator.reset()
        self._state = SessionState.IDLE
