"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibstream.models import UnitContext, UnitState  # noqa: E402
from bibstream.parse import Parser  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingListener:
    """Listener keeping every (text, state) call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str | None, UnitState]] = []
        self.contexts: list[UnitContext] = []

    def on_unit(self, text: str | None, context: UnitContext) -> None:
        self.calls.append((text, context.state))
        self.contexts.append(context)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding .bib fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def record_units() -> Callable[[str], list[tuple[str | None, UnitState]]]:
    """Parse source text and return the emitted (text, state) pairs."""

    def _record(source: str) -> list[tuple[str | None, UnitState]]:
        listener = RecordingListener()
        parser = Parser()
        parser.add_listener(listener)
        parser.parse(source)
        return listener.calls

    return _record


@pytest.fixture
def recording_listener() -> RecordingListener:
    """Fresh listener recording every unit."""
    return RecordingListener()
