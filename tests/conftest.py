"""
Pytest configuration and shared fixtures for the Connect Four tests.
"""

import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.game.rules import ConnectFourGame


@pytest.fixture(autouse=True)
def quiet_debug():
    """Restore the shared debug manager after each test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def game():
    return ConnectFourGame(6, 7)


@pytest.fixture
def small_game():
    return ConnectFourGame(4, 4)


@pytest.fixture
def draw_moves():
    """4x4 sequence that fills the board without anyone connecting four."""
    return [0, 1, 0, 1, 2, 3, 2, 3, 1, 0, 1, 0, 3, 2, 3, 2]


@pytest.fixture
def draw_text():
    """Display string of the board left by draw_moves."""
    return "YRYR\nYRYR\nRYRY\nRYRY\n"
