"""
Strata - Pass 01: Surface and Caves
Carves the initial stone mass out of value noise below a fractal surface
line, and lays the background stone a few cells below that line.

APPROACH:
- Per column, the surface height comes from fBm noise scaled by amplitude
  and lifted by height_offset
- The solid threshold falls off towards the surface, so the ground gets
  more solid near the top and more cavernous further down
"""

import logging
import math

import numpy as np

from strata.config import GenerationSettings, TileId
from strata.errors import ConfigurationError
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


def surface_heights(terrain: Terrain, settings: GenerationSettings) -> np.ndarray:
    """
    Surface row of every column, floored so that a sample just below zero
    lands on row -1 (empty column) rather than row 0. May fall outside the
    grid on either side.
    """
    surface = settings.surface
    heights = np.empty(terrain.width, dtype=np.int64)

    for x in range(terrain.width):
        sample = terrain.noise.surface.get(surface.scale * x / terrain.width, 0.0)
        heights[x] = math.floor(sample * surface.amplitude + surface.height_offset * terrain.height)

    return heights


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Fill the foreground with stone/empty and the background with stone/empty.

    Args:
        terrain: Terrain to update
        settings: Generation settings

    Raises:
        ConfigurationError: if a column's surface height floors to 0. Columns
            below 0 are left empty.
    """
    width, height = terrain.width, terrain.height
    caves = settings.caves

    max_heights = surface_heights(terrain, settings)
    degenerate = np.flatnonzero(max_heights == 0)
    if degenerate.size:
        raise ConfigurationError(
            f"Surface height is 0 at column {int(degenerate[0])}; "
            f"check surface.amplitude and surface.height_offset"
        )

    xs, ys = np.meshgrid(np.arange(width), np.arange(height), indexing="ij")
    max_h = max_heights[:, None]

    # Threshold drops with height so the surface stays mostly solid
    solid_density = caves.solid_density - ys / max_h * caves.solid_density * caves.falloff
    values = terrain.noise.value.sample(xs, ys)

    solid = (ys <= max_h) & (values >= solid_density)
    terrain.foreground.fill(TileId.EMPTY)
    terrain.foreground.ids[solid] = int(TileId.STONE)

    backed = ys <= max_h - settings.background_offset
    terrain.background.fill(TileId.EMPTY)
    terrain.background.ids[backed] = int(TileId.BACKGROUND_STONE)

    logger.debug(
        f"Surface between rows {int(max_heights.min())} and {int(max_heights.max())}, "
        f"{int(solid.sum())} solid cells"
    )
