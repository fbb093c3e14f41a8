"""
Terrain generation module.

Thresholds a NoiseField into an island map of playable cells and derives
the bomb budget for boards built on it.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from minefield.board import Board
from minefield.difficulty import BoardConfig, Difficulty

from .noise import NoiseField


logger = logging.getLogger(__name__)

MIN_NOISE_BOMBS = 10
CELLS_PER_BOMB = 6


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class TerrainConfig:
    """
    Parameters of the land/water threshold.

    Attributes:
        scale: Noise distance between neighboring cells. Larger values
            give more scattered terrain.
        land_threshold: Cells whose noise, mapped to [0, 1], exceeds
            this value are land.
    """

    scale: float = 0.3
    land_threshold: float = 0.45


DEFAULT_TERRAIN = TerrainConfig()


@dataclass
class TerrainMap:
    """
    A generated island map.

    Attributes:
        playable: Boolean array, True for land cells.
        playable_count: Number of land cells.
    """

    playable: np.ndarray
    playable_count: int

    @property
    def rows(self) -> int:
        return self.playable.shape[0]

    @property
    def cols(self) -> int:
        return self.playable.shape[1]


# ============================================================================
# Generation
# ============================================================================

def generate(
    rows: int,
    cols: int,
    seed: int,
    scale: float = DEFAULT_TERRAIN.scale,
    land_threshold: float = DEFAULT_TERRAIN.land_threshold,
) -> TerrainMap:
    """
    Generate an island map.

    Cell (r, c) is land when the noise at (r * scale, c * scale),
    normalized to [0, 1], is above the threshold. No smoothing is
    applied, so land stays scattered.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        seed: Noise seed; equal seeds give equal maps.
        scale: Noise distance between neighboring cells.
        land_threshold: Normalized noise level above which cells are land.

    Raises:
        ValueError: If the dimensions are not positive.
    """
    if rows < 1 or cols < 1:
        raise ValueError("Terrain dimensions must be positive")

    noise = NoiseField(seed)
    normalized = (noise.sample_grid(rows, cols, scale) + 1.0) / 2.0
    playable = normalized > land_threshold
    return TerrainMap(playable=playable, playable_count=int(playable.sum()))


def bomb_budget_for(playable_count: int) -> int:
    """Bomb budget of a noise board: one per six land cells, at least 10."""
    return max(MIN_NOISE_BOMBS, playable_count // CELLS_PER_BOMB)


def random_seed(rng: Optional[random.Random] = None) -> int:
    """Draw a fresh signed 64-bit seed."""
    source = rng or random.Random()
    return source.getrandbits(64) - (1 << 63)


def build_noise_board(
    rows: int,
    cols: int,
    seed: int,
    difficulty: Difficulty,
    terrain: TerrainConfig = DEFAULT_TERRAIN,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Build a board on a generated island map.

    The bomb budget is derived from the land area; the board clamps it
    so at least one land cell stays safe.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        seed: Terrain seed.
        difficulty: Tier controlling cascade budget and hard-mode damage.
        terrain: Threshold parameters.
        rng: Random source for bomb and power-up placement.
    """
    terrain_map = generate(
        rows, cols, seed, terrain.scale, terrain.land_threshold
    )
    num_bombs = bomb_budget_for(terrain_map.playable_count)
    logger.debug(
        "Noise board %dx%d seed=%d: %d land cells, %d bombs requested",
        rows, cols, seed, terrain_map.playable_count, num_bombs,
    )
    config = BoardConfig(rows, cols, num_bombs, difficulty)
    return Board(config, terrain_map.playable, rng or random.Random())
