"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    Board,
    BoardConfig,
    Cell,
    Difficulty,
    Player,
    PowerUpKind,
)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 easy board with 10 bombs."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no bombs or power-ups for cascade testing."""
    return Board.from_layout(BoardConfig(5, 5, 0), bombs=[])


@pytest.fixture
def corner_bomb_board() -> Board:
    """
    Create a 5x5 easy board with one bomb in the corner.

    Layout (B = bomb):
        B . . . .
        . . . . .
        . . . . .
        . . . . .
        . . . . .
    """
    return Board.from_layout(BoardConfig(5, 5, 1), bombs=[(0, 0)])


@pytest.fixture
def power_up_board() -> Board:
    """
    Create a 4x4 board with one bomb and one heal power-up.

    Layout (B = bomb, H = heal):
        B . . .
        . . . .
        . . H .
        . . . .
    """
    return Board.from_layout(
        BoardConfig(4, 4, 1),
        bombs=[(0, 0)],
        power_ups={(2, 2): PowerUpKind.HEAL},
    )


@pytest.fixture
def hard_area_board() -> Board:
    """
    Create a 5x5 hard board with two bombs inside the center 3x3 block.

    Layout (B = bomb):
        . . . . .
        . B . . .
        . . . . .
        . . . B .
        . . . . .
    """
    return Board.from_layout(
        BoardConfig(5, 5, 2, Difficulty.HARD), bombs=[(1, 1), (3, 3)]
    )


# ============================================================================
# Player and Cell Fixtures
# ============================================================================

@pytest.fixture
def player() -> Player:
    """Create a player with full health and one charge of each kind."""
    return Player()


@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a cell containing a bomb."""
    return Cell(is_bomb=True)


@pytest.fixture
def power_up_cell() -> Cell:
    """Create a hidden cell with a buried reveal power-up."""
    return Cell(hidden_power_up=PowerUpKind.REVEAL)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
