"""
Strata - Noise Generation Utilities
Deterministic, seeded scalar noise for terrain generation.

Two fields are used:
- ValueNoise: lattice value noise. Sampled at integer cell coordinates it
  yields an independent value per cell, which is what cave carving wants.
- FractalNoise: a fractal sum of OpenSimplex octaves, for smooth surface
  and stratification lines.

Both return values in [-1, 1] and are pure functions of (seed, x, y).
"""

import hashlib
from typing import Union

import numpy as np
from opensimplex import OpenSimplex

ArrayLike = Union[float, np.ndarray]

# Value noise repeats after this many lattice cells along each axis
LATTICE_SIZE = 4096


def seed_to_int(seed: str) -> int:
    """
    Hash a seed string into a stable 64-bit integer.

    Python's built-in hash() is salted per process, so it cannot be used
    for reproducible worlds.
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def _quintic(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


class ValueNoise:
    """
    Lattice value noise.

    A seeded permutation table hashes integer lattice points to seeded
    values; points in between are blended with a quintic curve.
    """

    def __init__(self, seed: int):
        self.seed = seed
        rng = np.random.default_rng(seed)
        self._perm = rng.permutation(LATTICE_SIZE).astype(np.int64)
        self._values = rng.uniform(-1.0, 1.0, LATTICE_SIZE)

    def _lattice(self, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
        mask = LATTICE_SIZE - 1
        return self._values[self._perm[(self._perm[xi & mask] + yi) & mask]]

    def sample(self, xs: ArrayLike, ys: ArrayLike) -> np.ndarray:
        """
        Sample the field at many points at once.

        Args:
            xs: X coordinates (scalar or array)
            ys: Y coordinates, broadcastable against xs

        Returns:
            Array of noise values in [-1, 1]
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)

        x0 = np.floor(xs).astype(np.int64)
        y0 = np.floor(ys).astype(np.int64)
        sx = _quintic(xs - x0)
        sy = _quintic(ys - y0)

        v00 = self._lattice(x0, y0)
        v10 = self._lattice(x0 + 1, y0)
        v01 = self._lattice(x0, y0 + 1)
        v11 = self._lattice(x0 + 1, y0 + 1)

        lower = v00 + sx * (v10 - v00)
        upper = v01 + sx * (v11 - v01)
        return lower + sy * (upper - lower)

    def get(self, x: float, y: float) -> float:
        return float(self.sample(x, y))


class FractalNoise:
    """
    Fractal (fBm) sum of OpenSimplex octaves.

    Each octave multiplies frequency by `lacunarity` and amplitude by
    `persistence`; the sum is divided by the total amplitude so the output
    stays in [-1, 1].
    """

    def __init__(
        self,
        seed: int,
        octaves: int = 6,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ):
        self.seed = seed
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity

        self.simplex = OpenSimplex(seed=seed)

    def get(self, x: float, y: float) -> float:
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(self.octaves):
            value += self.simplex.noise2(x * frequency, y * frequency) * amplitude
            max_value += amplitude

            amplitude *= self.persistence
            frequency *= self.lacunarity

        return value / max_value


class NoiseField:
    """
    All noise a terrain needs, derived from one seed string.

    The string is hashed into a PRNG which hands out an independent sub-seed
    per field, so adding a field later does not disturb existing ones as
    long as it is drawn last.
    """

    def __init__(
        self,
        seed: str,
        octaves: int = 6,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ):
        self.seed = seed
        rng = np.random.default_rng(seed_to_int(seed))

        self.value = ValueNoise(int(rng.integers(0, 2**31 - 1)))
        self.surface = FractalNoise(
            int(rng.integers(0, 2**31 - 1)),
            octaves=octaves,
            persistence=persistence,
            lacunarity=lacunarity,
        )


__all__ = [
    "seed_to_int",
    "ValueNoise",
    "FractalNoise",
    "NoiseField",
]
