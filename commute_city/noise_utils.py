import logging

import numpy as np
import noise

from .errors import ConfigError

logger = logging.getLogger(__name__)


class NoiseField:
    """Coherent 2D noise sampled on a grid, each cell a fixed function of its coordinates."""

    def __init__(self, base: int = 0, octaves: int = 1,
                 persistence: float = 0.5, lacunarity: float = 2.0):
        self.base = base
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity

    def value(self, x: float, y: float) -> float:
        """Density at a point: raw Perlin value mapped from [-1, 1] onto [0, 1]"""
        n = noise.pnoise2(
            x, y,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            base=self.base
        )
        return min(1.0, max(0.0, (n + 1.0) / 2.0))

    def generate(self, width: int, height: int, freq_x: float, freq_y: float,
                 offset_x: float, offset_y: float) -> np.ndarray:
        """
        Density field of shape (width, height), indexed field[x, y].
        Cell (i, j) samples the noise at (freq_x * i + offset_x, freq_y * j + offset_y).
        The returned array is read-only.
        """
        if width <= 0 or height <= 0:
            raise ConfigError(f"Field dimensions must be positive, got {width}x{height}")

        xs = freq_x * np.arange(width) + offset_x
        ys = freq_y * np.arange(height) + offset_y
        X, Y = np.meshgrid(xs, ys, indexing='ij')

        vec = np.vectorize(self.value, otypes=[np.float64])
        field = vec(X, Y)

        field.setflags(write=False)
        logger.debug("Generated %dx%d density field (base=%d)", width, height, self.base)
        return field


def generate(width: int, height: int, freq_x: float, freq_y: float,
             offset_x: float, offset_y: float, base: int = 0, octaves: int = 1) -> np.ndarray:
    return NoiseField(base=base, octaves=octaves).generate(
        width, height, freq_x, freq_y, offset_x, offset_y)
