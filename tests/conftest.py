"""Shared pytest fixtures."""

import pytest
from rich.console import Console


@pytest.fixture
def console() -> Console:
    """A wide, colorless console; wrap calls in ``console.capture()`` to read what was printed."""
    return Console(width=120, color_system=None, force_terminal=False)
