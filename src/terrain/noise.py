"""
Gradient noise module.

Seeded 2D Perlin-style noise used to carve land and water on island
maps. Output depends only on the seed and the sample coordinates.
"""
import math

import numpy as np


# ============================================================================
# Constants
# ============================================================================

PERMUTATION_SIZE = 256
_UINT64_MASK = (1 << 64) - 1


def _fade(t: float) -> float:
    """Smootherstep curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    """Dot product with one of the gradients picked by the low 4 bits."""
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = 0.0
    return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)


# ============================================================================
# Noise Field
# ============================================================================

class NoiseField:
    """
    Deterministic 2D gradient noise.

    The permutation table is a seeded shuffle of 0..255, stored twice so
    corner hashing never wraps.
    """

    def __init__(self, seed: int) -> None:
        """
        Build the permutation table.

        Args:
            seed: Any integer; negative seeds are taken modulo 2**64.
        """
        self.seed = seed
        rng = np.random.default_rng(seed & _UINT64_MASK)
        permutation = rng.permutation(PERMUTATION_SIZE)
        self._perm = [int(value) for value in permutation] * 2

    def sample(self, x: float, y: float) -> float:
        """
        Sample the field at a point.

        Returns:
            Noise value in [-1, 1]; exactly 0 at integer coordinates.
        """
        p = self._perm
        floor_x = math.floor(x)
        floor_y = math.floor(y)
        cell_x = floor_x & 255
        cell_y = floor_y & 255
        x -= floor_x
        y -= floor_y
        u = _fade(x)
        v = _fade(y)

        a = p[cell_x] + cell_y
        b = p[cell_x + 1] + cell_y
        return _lerp(
            v,
            _lerp(u, _grad(p[a], x, y), _grad(p[b], x - 1, y)),
            _lerp(u, _grad(p[a + 1], x, y - 1), _grad(p[b + 1], x - 1, y - 1)),
        )

    def sample_grid(self, rows: int, cols: int, scale: float) -> np.ndarray:
        """
        Sample the field on a grid.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            scale: Distance between neighboring samples.

        Returns:
            Float array where [r, c] is sample(r * scale, c * scale).
        """
        grid = np.empty((rows, cols), dtype=np.float64)
        for row in range(rows):
            for col in range(cols):
                grid[row, col] = self.sample(row * scale, col * scale)
        return grid
