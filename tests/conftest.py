"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from backgammon_engine.core.board import empty_board
from backgammon_engine.core.game import Game


@pytest.fixture
def rng():
    """Create a seeded NumPy generator for testing."""
    return np.random.default_rng(42)


@pytest.fixture
def game():
    """Create a fresh game in the opening position."""
    return Game()


@pytest.fixture
def make_game():
    """Build a game from a custom layout.

    The layout maps point index to signed checker count (positive = White).
    """
    def _make(layout, bar=(0, 0), rules=None):
        game = Game(rules)
        board = empty_board(game.rules)
        for point, count in layout.items():
            board.points[point] = count
        board.bar[:] = bar
        game.board = board
        return game

    return _make
