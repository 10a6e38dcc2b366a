"""
Strata - Pass 03: Stratification
Turns the upper band of the ground into dirt. The dirt line follows its
own fractal noise row plus a little random jitter per column.
"""

import logging

from strata.config import DIRT_NOISE_ROW, GenerationSettings, TileId
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Convert non-empty cells above the dirt line to dirt.

    Args:
        terrain: Terrain to update
        settings: Generation settings
    """
    rng = terrain.rng("pass_03_strata")
    surface = settings.surface
    foreground = terrain.foreground
    background = terrain.background

    converted = 0
    for x in range(terrain.width):
        sample = terrain.noise.surface.get(surface.scale * x / terrain.width, DIRT_NOISE_ROW)
        dirt_height = int(
            sample * surface.amplitude
            + settings.dirt_height * terrain.height
            + rng.random() * settings.stone_jitter
        )
        start = max(dirt_height, 0)

        fg_column = foreground.ids[x, start:]
        fg_solid = fg_column != int(TileId.EMPTY)
        fg_column[fg_solid] = int(TileId.DIRT)
        converted += int(fg_solid.sum())

        bg_column = background.ids[x, start:]
        bg_column[bg_column != int(TileId.EMPTY)] = int(TileId.BACKGROUND_DIRT)

    logger.debug(f"{converted} foreground cells converted to dirt")
