"""Configuration and settings management."""

import shutil
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Fields required before a card is emitted
    CHECK_CARD_NUMBER: bool = True
    CHECK_CARD_HOLDER: bool = True
    CHECK_CARD_EXPIRY_DATE: bool = True

    # Validation strictness
    USE_LUHN_VALIDATION: bool = True
    REJECT_EXPIRED: bool = False

    # Session behaviour
    DEBUG: bool = False
    NEXT_FRAME_DELAY_MS: int = 0
    MERGE_POLICY: str = "keep_first"

    # Camera settings
    CAMERA_INDEX: int = 0

    # OCR settings
    OCR_ENGINE: str = "auto"
    TESSERACT_PATH: Optional[str] = None

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "INFO"
        return v

    @field_validator('TESSERACT_PATH', mode='before')
    @classmethod
    def validate_tesseract_path(cls, v):
        """Convert empty/whitespace strings to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('MERGE_POLICY', mode='before')
    @classmethod
    def validate_merge_policy(cls, v):
        """Accept keep_first / keep_latest in any case."""
        v = str(v).strip().lower() or "keep_first"
        if v not in ("keep_first", "keep_latest"):
            raise ValueError(f"Unknown merge policy: {v}")
        return v

    @field_validator('OCR_ENGINE', mode='before')
    @classmethod
    def validate_ocr_engine(cls, v):
        v = str(v).strip().lower() or "auto"
        if v not in ("auto", "tesseract", "text"):
            raise ValueError(f"Unknown OCR engine: {v}")
        return v

    @field_validator('NEXT_FRAME_DELAY_MS')
    @classmethod
    def validate_delay(cls, v):
        if v < 0:
            raise ValueError("NEXT_FRAME_DELAY_MS must not be negative")
        return v

    model_config = {
        "env_prefix": "CARDSCAN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

# Global settings instance
settings = Settings()

# Checked in order when the binary is not on PATH
TESSERACT_FALLBACK_PATHS = (
    "/opt/homebrew/bin/tesseract",
    "/usr/local/bin/tesseract",
    "/usr/bin/tesseract",
)


def resolve_tesseract_path() -> str:
    """
    Locate the Tesseract binary.

    A configured CARDSCAN_TESSERACT_PATH wins if it exists, then PATH, then
    the usual package-manager locations.

    Raises:
        FileNotFoundError: If no binary is found anywhere
    """
    configured = settings.TESSERACT_PATH
    if configured and Path(configured).exists():
        return configured

    on_path = shutil.which("tesseract")
    if on_path:
        return on_path

    for candidate in TESSERACT_FALLBACK_PATHS:
        if Path(candidate).exists():
            return candidate

    raise FileNotFoundError(
        "Tesseract not found. Install it with your package manager "
        "(brew install tesseract / apt install tesseract-ocr)"
    )
