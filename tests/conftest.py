"""
Pytest configuration and fixtures.
"""

import io

import pytest

from rangeprogress.config import reset_config
from rangeprogress.core.tracker import RangeTracker
from rangeprogress.display.text_renderer import TextProgressRenderer


@pytest.fixture(autouse=True)
def default_config():
    """Restore the process-wide configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def tracker():
    """Fresh tracker at 0.0 with only the base frame."""
    return RangeTracker()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def text_renderer(stream):
    """Text renderer writing to an in-memory stream."""
    return TextProgressRenderer(file=stream, width=12)
