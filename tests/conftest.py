"""Pytest fixtures for strict_emitter tests."""

from unittest.mock import MagicMock

import pytest

from strict_emitter.lib.events import EventEmitter


@pytest.fixture
def diagnostics():
    """A stand-in diagnostics sink recording warnings and errors."""
    return MagicMock(spec=["warning", "error"])


@pytest.fixture
def emitter(diagnostics):
    """An EventEmitter wired to the mocked diagnostics sink."""
    return EventEmitter(diagnostics=diagnostics)


@pytest.fixture
def listeners():
    """Three independent listener stubs."""
    return [MagicMock(name=f"listener_{i}") for i in range(3)]
