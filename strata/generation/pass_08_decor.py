"""
Strata - Pass 08: Surface Decor
Scatters grass tufts, flowers, mushrooms, bushes and boulders on top of
the ground.
"""

import logging

from strata.catalog import SURFACE_DECOR, descriptor
from strata.config import GenerationSettings
from strata.errors import ConfigurationError
from strata.generation.structures import place_structure
from strata.models.terrain import Terrain
from strata.models.tiles import Tile

logger = logging.getLogger(__name__)


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Place surface decor in the middle layer.

    Args:
        terrain: Terrain to update
        settings: Generation settings

    Raises:
        ConfigurationError: if the decor range reaches past SURFACE_DECOR
    """
    rng = terrain.rng("pass_08_decor")
    decor = settings.decor
    foreground = terrain.foreground
    middle = terrain.middle
    lo, hi = decor.surface_range

    placed = 0
    x = 1
    while x < terrain.width - 2:
        if rng.random() >= decor.surface_rate:
            x += 1
            continue

        floor = foreground.top_occupied(x)
        if floor is None or not foreground.is_occupied(x - 1, floor):
            x += 1
            continue

        index = int(rng.integers(lo, hi))
        if index >= len(SURFACE_DECOR):
            raise ConfigurationError(
                f"Decor index {index} is outside the {len(SURFACE_DECOR)} surface decor tiles"
            )
        tile_id = SURFACE_DECOR[index]
        desc = descriptor(tile_id)

        if not desc.is_multi_tile:
            target = middle.get(x, floor + 1)
            if foreground.is_occupied(x + 1, floor) and target is not None and target.is_empty:
                middle.set(x, floor + 1, Tile(tile_id))
                placed += 1
            x += 1
            continue

        width = desc.footprint[0]
        # Ground must continue under the whole footprint and one column past it
        if all(foreground.is_occupied(x + i, floor) for i in range(width + 1)):
            if place_structure(terrain, tile_id, x, floor + 1):
                placed += 1
                x += width
                continue

        x += 1

    logger.debug(f"{placed} decor pieces placed")
