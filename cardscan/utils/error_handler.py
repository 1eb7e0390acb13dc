"""
Centralized error handling for the credit card scanner.

Only recognition-level failures ever leave the scanning core, and only when
the session runs in debug mode. Per-line problems (no match, failed checksum,
out-of-range month) are not errors at all and never reach this module.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass


class CardScannerError(Exception):
    """Base exception class for all card scanner errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CardScannerError):
    """Raised when scan options or environment settings are unusable."""
    pass


class RecognitionError(CardScannerError):
    """Raised when the OCR engine fails on a frame."""
    pass


class NoDeviceAvailableError(CardScannerError):
    """Raised when no camera can be opened; the session never starts."""
    pass


class IncompleteCardError(CardScannerError):
    """Raised when a snapshot is requested before every enabled field is known."""
    pass


@dataclass
class ErrorContext:
    """Context information for error reporting."""
    operation: str
    module: str
    function: str
    input_data: Optional[Dict[str, Any]] = None
    timestamp: Optional[str] = None


def handle_error(
    error: Exception,
    context: ErrorContext,
    logger: Any,
    reraise: bool = True,
    default_return: Any = None
) -> Any:
    """
    Centralized error handling with logging and optional recovery.

    Args:
        error: The exception that occurred
        context: Context information about where the error occurred
        logger: structlog logger used for error reporting
        reraise: Whether to re-raise the exception after logging
        default_return: Value to return if not re-raising

    Returns:
        The default_return value if not re-raising

    Raises:
        The original exception if reraise is True
    """
    error_msg = f"Error in {context.module}.{context.function} during {context.operation}"

    if isinstance(error, CardScannerError):
        error_msg += f": {error.message}"
    else:
        error_msg += f": {str(error)}"

    logger.error(
        error_msg,
        error_type=type(error).__name__,
        operation=context.operation,
        error_module=context.module,
        error_function=context.function,
        input_data=context.input_data,
        timestamp=context.timestamp,
        details=getattr(error, "details", None),
    )

    if reraise:
        raise error

    return default_return
