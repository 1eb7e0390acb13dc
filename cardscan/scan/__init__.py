"""Scanning package: field accumulation and the session controller."""

from .accumulator import CardAccumulator
from .session import ScanSession

__all__ = ["CardAccumulator", "ScanSession"]
