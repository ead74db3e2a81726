"""
Shared test fixtures for tictactoe tests.

Design principles:
- Boards built from readable row strings
- Controllers driven by scripted input, never stdin (see tests/app)
- Seeded rng wherever randomness is involved
"""

import random
from typing import Callable

import pytest

from tictactoe.core.board import Board
from tictactoe.core.game import Game


# =============================================================================
# Board Fixtures
# =============================================================================

@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory: make_board("XO_", "_X_", "__O")."""
    def _make(*rows: str) -> Board:
        return Board.from_rows(rows)
    return _make


@pytest.fixture
def game() -> Game:
    return Game()


# =============================================================================
# Randomness Fixtures
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)

