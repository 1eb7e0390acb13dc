"""Structured logging for the scanner.

Everything goes through structlog over the standard library and is rendered
as JSON. Debug traces echo raw OCR lines, so a redaction processor masks
anything shaped like a card number before it is rendered.
"""

import logging
import re
import sys
import time
from typing import Any, Dict, Optional

import structlog

from .config import settings

# 13-19 digits, optionally grouped by single spaces or dashes
PAN_PATTERN = re.compile(r"(?<!\d)\d(?:[ \-]?\d){12,18}(?!\d)")


def _mask(match: "re.Match") -> str:
    digits = re.sub(r"\D", "", match.group(0))
    return "*" * (len(digits) - 4) + digits[-4:]


def redact_card_numbers(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor: keep only the last four digits of card numbers."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = PAN_PATTERN.sub(_mask, value)
    return event_dict


def configure_logging(log_level: Optional[str] = None):
    """Configure structlog with card-number redaction and a JSON renderer."""
    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_card_numbers,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


class LoggerMixin:
    """Gives a class a lazily created logger and timed operation helpers."""

    @property
    def logger(self) -> structlog.BoundLogger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_start(self, event: str, **kwargs: Any) -> Dict[str, Any]:
        """Log the start of an operation; pass the result to log_success/log_error."""
        self.logger.debug(f"{event} started", **kwargs)
        return {"event": event, "started": time.perf_counter(), **kwargs}

    def _finish(self, context: Dict[str, Any], kwargs: Dict[str, Any]) -> Dict[str, Any]:
        fields = {k: v for k, v in context.items() if k not in ("event", "started")}
        if "started" in context:
            fields["duration_ms"] = int((time.perf_counter() - context["started"]) * 1000)
        fields.update(kwargs)
        return fields

    def log_success(self, context: Dict[str, Any], **kwargs: Any):
        event = context.get("event", "operation")
        self.logger.debug(f"{event} completed", **self._finish(context, kwargs))

    def log_error(self, context: Dict[str, Any], error: Exception, **kwargs: Any):
        event = context.get("event", "operation")
        self.logger.error(
            f"{event} failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._finish(context, kwargs),
        )
