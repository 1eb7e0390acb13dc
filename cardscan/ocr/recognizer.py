"""Text recognition backends.

The scanning core never sees pixels. It asks a TextRecognizer for the lines
found on a frame; which engine answers is decided once, at the boundary.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

import cv2
import numpy as np
import pytesseract

from ..utils.config import resolve_tesseract_path, settings
from ..utils.error_handler import ConfigurationError, RecognitionError
from ..utils.log import LoggerMixin


class TextRecognizer(ABC):
    """Turns one frame into an unordered list of text lines."""

    name: str = "base"

    @abstractmethod
    def recognize(self, frame: Any) -> List[str]:
        """Return the non-empty lines recognized on frame."""


def _split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class PlainTextRecognizer(TextRecognizer):
    """Treats frames as already-recognized text (OCR dumps, tests)."""

    name = "text"

    def recognize(self, frame: Union[str, Iterable[str]]) -> List[str]:
        if frame is None:
            return []
        if isinstance(frame, str):
            return _split_lines(frame)
        lines: List[str] = []
        for item in frame:
            lines.extend(_split_lines(str(item)))
        return lines


class TesseractRecognizer(TextRecognizer, LoggerMixin):
    """Recognizes text on images with Tesseract."""

    name = "tesseract"

    def __init__(self, tesseract_path: Optional[str] = None, config: str = "--psm 6"):
        self.tesseract_path = tesseract_path or resolve_tesseract_path()
        pytesseract.pytesseract.tesseract_cmd = self.tesseract_path
        self.config = config

        self.logger.info(
            "Tesseract recognizer initialized",
            tesseract_path=self.tesseract_path,
            config=self.config,
        )

    def _load(self, frame: Union[np.ndarray, str, Path]) -> np.ndarray:
        if isinstance(frame, np.ndarray):
            return frame
        image = cv2.imread(str(frame))
        if image is None:
            raise RecognitionError(
                f"Could not read image: {frame}", details={"path": str(frame)}
            )
        return image

    def recognize(self, frame: Union[np.ndarray, str, Path]) -> List[str]:
        image = self._load(frame)
        context = self.log_start("Tesseract OCR", shape=list(image.shape))
        try:
            text = pytesseract.image_to_string(image, config=self.config)
        except (pytesseract.TesseractError, OSError, RuntimeError) as e:
            self.log_error(context, e)
            raise RecognitionError(
                "Tesseract failed to recognize frame",
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        lines = _split_lines(text)
        self.log_success(context, line_count=len(lines))
        return lines


def get_recognizer(engine: Optional[str] = None) -> TextRecognizer:
    """
    Select a recognition backend.

    Args:
        engine: "tesseract", "text" or "auto" (default: settings.OCR_ENGINE).
            "auto" uses Tesseract and fails if no binary is installed.

    Raises:
        ConfigurationError: Unknown engine or missing Tesseract binary
    """
    engine = (engine or settings.OCR_ENGINE).strip().lower()

    if engine == "text":
        return PlainTextRecognizer()

    if engine in ("tesseract", "auto"):
        try:
            return TesseractRecognizer()
        except FileNotFoundError as e:
            raise ConfigurationError(
                "No OCR engine available", details={"engine": engine, "error": str(e)}
            ) from e

    raise ConfigurationError(
        f"Unknown OCR engine: {engine}",
        details={"engine": engine, "allowed": ["auto", "tesseract", "text"]},
    )
