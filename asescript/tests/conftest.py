"""
Pytest configuration for ASE Script tests.
"""
from pathlib import Path
import sys

import pytest

# Ensure the project root is on the Python path for all tests
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from asescript.environment import ScriptEnvironment  # noqa: E402
from asescript.tests.utils import CircleCommandMock, RecordingDispatcher  # noqa: E402


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """
    A dispatcher with only the ``circle`` command registered.
    """
    dispatcher = RecordingDispatcher()
    dispatcher.registry.register(CircleCommandMock())
    return dispatcher


@pytest.fixture
def env(dispatcher) -> ScriptEnvironment:
    return ScriptEnvironment(dispatcher, "<test>")
