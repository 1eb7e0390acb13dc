"""Pytest configuration and shared fixtures for Credit Card Scanner tests."""

from datetime import date

import pytest

from cardscan.core.types import ScanOptions
from cardscan.ocr.recognizer import TextRecognizer


class FakeRecognizer(TextRecognizer):
    """Returns canned lines per frame; frames may also be exceptions to raise."""

    name = "fake"

    def __init__(self):
        self.calls = []

    def recognize(self, frame):
        self.calls.append(frame)
        if isinstance(frame, Exception):
            raise frame
        return list(frame)


@pytest.fixture(scope="function")
def options():
    """Default options: every field required, Luhn on."""
    return ScanOptions()


@pytest.fixture(scope="function")
def today():
    """A fixed calendar position for expiry checks."""
    return date(2026, 10, 18)


@pytest.fixture(scope="function")
def fake_recognizer():
    return FakeRecognizer()


@pytest.fixture(scope="function")
def sample_card_lines():
    """One frame showing every field of a Visa card."""
    return ["4539 1488 0343 6467", "JOHN SMITH", "VALID THRU 09/27"]


@pytest.fixture(scope="function")
def noisy_frames():
    """Consecutive frames of one card, each missing something."""
    return [
        ["BANK OF NOWHERE", "VISA", "JOHN SMITH"],
        ["4539 1488 0343 6468", "MEMBER SINCE 19"],
        ["VALID", "THRU 09/27", "DEBIT"],
        ["4539 1488 0343 6467"],
    ]


# Configure pytest options
def pytest_configure(config):
    """Configure pytest with custom options."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark integration tests
        if "integration" in item.name.lower() or "Integration" in str(item.cls):
            item.add_marker(pytest.mark.integration)

        # Mark unit tests (default)
        if not item.get_closest_marker('integration') and not item.get_closest_marker('slow'):
            item.add_marker(pytest.mark.unit)
